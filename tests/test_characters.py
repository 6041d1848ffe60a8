import pytest

from gridskirmish.characters import (
    CELL,
    HEAL_AMOUNT,
    MAX_ENERGY,
    SNIPE_COST,
    SNIPE_DAMAGE,
    ActionRefused,
    AttackResult,
    Character,
    Faction,
    Kind,
    Roster,
    grid_distance,
    snap_to_grid,
)


class _FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, n):
        return self.value


ALWAYS_HIT = _FixedRng(99)
ALWAYS_MISS = _FixedRng(0)


def make(name="u", kind=Kind.COMMON, faction=Faction.ALLY, x=512, y=160, **stats):
    values = dict(life=10, energy=5, atk=4, movement=3, agility=20, reach=2.0)
    values.update(stats)
    return Character(name=name, kind=kind, faction=faction, x=x, y=y, **values)


@pytest.mark.parametrize("value", [0, 5, 31, 32, 512, 1279])
def test_snap_to_grid_centres_in_same_cell(value):
    snapped = snap_to_grid(value)
    assert snapped % CELL == CELL // 2
    assert snapped // CELL == value // CELL
    assert snap_to_grid(snapped) == snapped


def test_snap_to_grid_accepts_float():
    assert snap_to_grid(320.0) == snap_to_grid(320)


def test_grid_distance_known_value():
    assert grid_distance(0, 0, 96, 128) == 5.0


def test_grid_distance_symmetric_and_ignores_sub_cell():
    assert grid_distance(16, 16, 208, 80) == grid_distance(208, 80, 16, 16)
    assert grid_distance(0, 0, 31, 31) == 0.0


def test_character_position_snapped_and_home_recorded():
    c = make(x=500, y=170)
    assert c.x == snap_to_grid(500)
    assert c.y == snap_to_grid(170)
    assert (c.home_x, c.home_y) == (c.x, c.y)


def test_right_and_top_are_symmetric_around_centre():
    c = make()
    assert c.right() > c.x
    assert c.top() < c.y
    assert c.right() - c.x == c.y - c.top()


def test_contains_centre_but_not_edge():
    c = make()
    assert c.contains(c.x, c.y)
    assert not c.contains(c.right(), c.y)
    assert not c.contains(c.x + CELL, c.y)


def test_kind_labels_distinct_and_scout_has_none():
    labels = {make(kind=k).kind_label() for k in (Kind.COMMON, Kind.MEDIC, Kind.SNIPER)}
    assert len(labels) == 3
    with pytest.raises(ValueError):
        make(kind=Kind.SCOUT).kind_label()


def test_attack_range_truncates():
    assert make(reach=2.9).attack_range() == 2


def test_path_to_reaches_target_with_unit_steps():
    c = make()
    start = (c.x, c.y)
    target = (c.x + 2 * CELL, c.y + 3 * CELL)
    path = c.path_to(*target)
    assert path[-1] == target
    assert len(path) == 3 * CELL
    previous = start
    for step in path:
        assert abs(step[0] - previous[0]) <= 1
        assert abs(step[1] - previous[1]) <= 1
        previous = step
    assert (c.x, c.y) == start


def test_path_to_same_cell_is_empty():
    c = make()
    assert c.path_to(c.x + 3, c.y - 3) == []


def test_move_to_spends_energy_and_keeps_home():
    c = make(energy=3)
    home = (c.home_x, c.home_y)
    c.move_to(c.x + CELL + 5, c.y)
    assert (c.x, c.y) == (snap_to_grid(512) + CELL, snap_to_grid(160))
    assert c.energy == 2
    assert (c.home_x, c.home_y) == home


def test_move_to_with_no_energy_stays_at_zero():
    c = make(energy=0)
    c.move_to(c.x, c.y + CELL)
    assert c.energy == 0


def test_attack_hit_reduces_life():
    roster = Roster()
    a = roster.add(make())
    e = roster.add(make(faction=Faction.ENEMY, x=512 + CELL))
    before = e.life
    assert a.attack(e, ALWAYS_HIT) is AttackResult.HIT
    assert e.life == before - a.atk
    assert a.energy == 4
    assert a.round_done


def test_attack_miss_leaves_target():
    a = make()
    e = make(faction=Faction.ENEMY, x=512 + CELL)
    a.round_done = False
    assert a.attack(e, ALWAYS_MISS) is AttackResult.MISSED
    assert e.life == 10
    assert a.round_done


def test_attack_kill_removes_from_roster():
    roster = Roster()
    a = roster.add(make(atk=10))
    e = roster.add(make(faction=Faction.ENEMY, x=512 + CELL, life=10))
    assert a.attack(e, ALWAYS_HIT) is AttackResult.KILLED
    assert e.dead
    assert e not in roster
    assert roster.enemies() == []


@pytest.mark.parametrize(
    "setup",
    ["no_energy", "ally", "self", "far"],
)
def test_attack_refusals_change_nothing(setup):
    a = make(energy=0 if setup == "no_energy" else 5)
    if setup == "self":
        target = a
    elif setup == "ally":
        target = make(x=512 + CELL)
    elif setup == "far":
        target = make(faction=Faction.ENEMY, x=512 + 5 * CELL)
    else:
        target = make(faction=Faction.ENEMY, x=512 + CELL)
    energy, life = a.energy, target.life
    with pytest.raises(ActionRefused):
        a.attack(target, ALWAYS_HIT)
    assert (a.energy, target.life) == (energy, life)


def test_medic_heals_adjacent_ally_and_self():
    medic = make(kind=Kind.MEDIC, energy=4)
    ally = make(x=512 + CELL, y=160 + CELL)
    life = ally.life
    medic.action(ally)
    assert ally.life == life + HEAL_AMOUNT
    own = medic.life
    medic.action(medic)
    assert medic.life == own + HEAL_AMOUNT
    assert medic.energy == 2
    assert medic.round_done


@pytest.mark.parametrize(
    "faction, dx, energy",
    [(Faction.ENEMY, 1, 4), (Faction.ALLY, 2, 4), (Faction.ALLY, 1, 0)],
)
def test_medic_refusals(faction, dx, energy):
    medic = make(kind=Kind.MEDIC, energy=energy)
    target = make(faction=faction, x=512 + dx * CELL)
    with pytest.raises(ActionRefused):
        medic.action(target)
    assert target.life == 10


def test_common_has_no_action():
    with pytest.raises(ActionRefused):
        make().action(make(x=512 + CELL))


def test_sniper_wounds_enemy():
    sniper = make(kind=Kind.SNIPER, energy=10, life=15)
    enemy = make(faction=Faction.ENEMY, x=512 + 4 * CELL, life=10)
    sniper.action(enemy)
    assert enemy.life == 10 - SNIPE_DAMAGE
    assert sniper.energy == 10 - SNIPE_COST
    assert sniper.round_done


def test_sniper_kills_weak_enemy():
    roster = Roster()
    sniper = roster.add(make(kind=Kind.SNIPER, energy=10))
    enemy = roster.add(make(faction=Faction.ENEMY, x=512 + CELL, life=SNIPE_DAMAGE))
    sniper.action(enemy)
    assert enemy.dead
    assert enemy not in roster


@pytest.mark.parametrize("case", ["self", "ally", "far", "tired"])
def test_sniper_refusals(case):
    sniper = make(kind=Kind.SNIPER, energy=SNIPE_COST - 1 if case == "tired" else 10)
    if case == "self":
        target = sniper
    elif case == "ally":
        target = make(x=512 + CELL)
    elif case == "far":
        target = make(faction=Faction.ENEMY, x=512 + 6 * CELL)
    else:
        target = make(faction=Faction.ENEMY, x=512 + CELL)
    with pytest.raises(ActionRefused):
        sniper.action(target)
    assert target.life == 10


def test_roster_partitions_and_hover():
    a = make(name="a")
    e = make(name="e", faction=Faction.ENEMY, x=512 + 3 * CELL)
    roster = Roster([a, e])
    assert roster.allies() == [a]
    assert roster.enemies() == [e]
    assert roster.of(Faction.ENEMY) == [e]
    assert len(roster) == 2
    assert roster.hovered(e.x, e.y) is e
    assert roster.hovered(0, 0) is None
    roster.remove(a)
    assert a not in roster
    assert roster.hovered(a.x, a.y) is None


def test_set_round_and_all_done():
    a = make(energy=5)
    full = make(x=512 + CELL, energy=MAX_ENERGY)
    e = make(faction=Faction.ENEMY, x=512 + 4 * CELL, energy=5)
    roster = Roster([a, full, e])
    assert roster.all_done(Faction.ALLY)
    roster.set_round(Faction.ALLY, False)
    assert not roster.all_done(Faction.ALLY)
    assert not a.round_moved
    assert a.energy == 6
    assert full.energy == MAX_ENERGY
    assert e.round_done and e.energy == 5
    roster.set_round(Faction.ALLY, True)
    assert roster.all_done(Faction.ALLY)
    assert a.energy == 6


def test_set_round_enemy_always_opens_round():
    e = make(faction=Faction.ENEMY, energy=5)
    roster = Roster([e])
    roster.set_round(Faction.ENEMY, True)
    assert not e.round_done
    assert e.energy == 6
    assert not roster.all_done(Faction.ENEMY)