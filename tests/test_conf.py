import copy
import math

import pytest

from dockcore.conf import (
    Change,
    Conf,
    ConfSize,
    LigandChange,
    LigandConf,
    OutputType,
    ResidueChange,
    ResidueConf,
    RigidChange,
    RigidConf,
    Scale,
    torsions_generate,
    torsions_increment,
    torsions_randomize,
    torsions_set_to_null,
    torsions_too_close,
)
from dockcore.quaternion import QT_IDENTITY, axis_angle_to_quaternion
from dockcore.randomness import make_rng


def _size():
    return ConfSize(ligands=[2, 3], flex=[1, 4])


def test_degrees_of_freedom_match_change_and_conf_lengths():
    size = _size()
    assert size.num_degrees_of_freedom() == len(Change(size))
    assert len(Conf(size).values()) == len(Change(size))


def test_change_starts_at_zero():
    change = Change(_size())
    assert all(v == 0.0 for v in change.values())


def test_change_index_round_trip():
    change = Change(_size())
    n = len(change)
    for i in range(n):
        change[i] = float(i) + 0.5
    expected = [float(i) + 0.5 for i in range(n)]
    assert change.values() == expected
    assert [change[i] for i in range(n)] == expected
    assert list(change) == expected


def test_change_index_layout():
    change = Change(ConfSize(ligands=[1], flex=[1]))
    change[0] = 1.5
    change[4] = 2.5
    change[6] = 3.5
    change[7] = 4.5
    assert change.ligands[0].rigid.position[0] == 1.5
    assert change.ligands[0].rigid.orientation[1] == 2.5
    assert change.ligands[0].torsions == [3.5]
    assert change.flex[0].torsions == [4.5]


def test_change_out_of_range():
    change = Change(_size())
    n = len(change)
    with pytest.raises(IndexError):
        change[n]
    with pytest.raises(IndexError):
        change[n] = 1.0
    assert change.values() == [0.0] * n
    with pytest.raises(IndexError):
        change[-1]
    change[n - 1] = 2.5
    assert change[n - 1] == 2.5


def test_torsions_set_to_null():
    t = [0.3, -1.2, 2.0]
    torsions_set_to_null(t)
    assert t == [0.0, 0.0, 0.0]


def test_torsions_increment_zero_factor_keeps_values():
    t = [0.3, -1.2]
    torsions_increment(t, [5.0, 5.0], 0.0)
    assert t == [0.3, -1.2]


def test_torsions_increment_normalizes():
    t = [3.0, -3.0]
    torsions_increment(t, [1.0, -1.0], 1.0)
    assert all(-math.pi <= x <= math.pi for x in t)
    assert math.cos(t[0]) == pytest.approx(math.cos(4.0))
    assert math.cos(t[1]) == pytest.approx(math.cos(-4.0))


def test_torsions_randomize_range_and_determinism():
    a = [0.0] * 20
    b = [0.0] * 20
    torsions_randomize(a, make_rng(7))
    torsions_randomize(b, make_rng(7))
    assert a == b
    assert all(-math.pi <= x <= math.pi for x in a)


def test_torsions_too_close():
    assert torsions_too_close([0.1, 0.2], [0.1, 0.2], 0.01)
    assert not torsions_too_close([0.1, 0.2], [0.1, 0.5], 0.1)
    assert torsions_too_close([math.pi - 0.01], [-math.pi + 0.01], 0.1)


def test_torsions_too_close_size_mismatch():
    with pytest.raises(ValueError):
        torsions_too_close([0.1], [0.1, 0.2], 0.1)


def test_torsions_generate_copies_reference():
    t = [0.0, 0.0, 0.0]
    rs = [1.0, 2.0, -1.0]
    torsions_generate(t, 0.5, 1.0, rs, make_rng(3))
    assert t == rs


def test_torsions_generate_perturbs_within_spread():
    t = [0.5, -0.5, 1.0]
    original = list(t)
    torsions_generate(t, 0.2, 0.0, None, make_rng(3))
    assert all(abs(a - b) <= 0.2 for a, b in zip(t, original))
    assert t != original


def test_torsions_generate_reference_size_mismatch():
    with pytest.raises(ValueError):
        torsions_generate([0.0], 0.1, 0.5, [1.0, 2.0], make_rng(1))


def test_rigid_increment_position():
    rc = RigidConf()
    rc.increment(RigidChange(position=(1.0, 2.0, 3.0)), 1.0)
    assert rc.position == pytest.approx((1.0, 2.0, 3.0))
    assert rc.orientation.approx_eq(QT_IDENTITY)


def test_rigid_increment_orientation_round_trip():
    rc = RigidConf()
    rotation = (0.1, 0.2, 0.3)
    rc.increment(RigidChange(orientation=rotation), 1.0)
    assert rc.values()[3:] == pytest.approx(list(rotation))


def test_rigid_apply_identity_and_translation():
    coords = [(1.0, 2.0, 3.0), (-1.0, 0.5, 0.0)]
    assert RigidConf().apply(coords) == [pytest.approx(v) for v in coords]
    rc = RigidConf(position=(1.0, 1.0, 1.0))
    moved = rc.apply(coords)
    for before, after in zip(coords, moved):
        assert [a - b for a, b in zip(after, before)] == pytest.approx([1.0, 1.0, 1.0])


def test_rigid_apply_rotation_about_z():
    rc = RigidConf(orientation=axis_angle_to_quaternion((0.0, 0.0, 1.0), math.pi / 2))
    (out,) = rc.apply([(1.0, 0.0, 0.0)])
    assert out == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)


def test_rigid_too_close():
    a = RigidConf()
    assert a.too_close(RigidConf(), 0.1, 0.1)
    assert not a.too_close(RigidConf(position=(5.0, 0.0, 0.0)), 1.0, 1.0)
    rotated = RigidConf(orientation=axis_angle_to_quaternion((1.0, 0.0, 0.0), 1.0))
    assert not a.too_close(rotated, 1.0, 0.5)
    assert a.too_close(rotated, 1.0, 1.5)


def test_rigid_mutations_stay_within_spread():
    rc = RigidConf()
    rng = make_rng(11)
    rc.mutate_position(0.5, rng)
    assert sum(x * x for x in rc.position) < 0.25
    rc.mutate_orientation(0.5, rng)
    angle = rc.values()[3:]
    assert sum(x * x for x in angle) < 0.25 + 1e-9


def test_rigid_generate_copies_reference():
    reference = RigidConf(
        position=(1.0, 2.0, 3.0),
        orientation=axis_angle_to_quaternion((0.0, 1.0, 0.0), 0.4),
    )
    rc = RigidConf()
    rc.generate(1.0, 1.0, 1.0, reference, make_rng(5))
    assert rc.position == reference.position
    assert rc.orientation == reference.orientation


def test_rigid_randomize_in_box():
    rc = RigidConf()
    rc.randomize((0.0, 0.0, 0.0), (1.0, 2.0, 3.0), make_rng(2))
    assert all(0.0 <= x <= hi for x, hi in zip(rc.position, (1.0, 2.0, 3.0)))
    assert rc.orientation.norm() == pytest.approx(1.0)


def test_ligand_and_residue_values():
    lc = LigandConf(torsions=[0.5, -0.5])
    assert lc.values()[6:] == [0.5, -0.5]
    ch = LigandChange(RigidChange((1.0, 2.0, 3.0), (0.0, 0.0, 0.0)), [0.7])
    assert ch.values() == [1.0, 2.0, 3.0, 0.0, 0.0, 0.0, 0.7]
    assert ResidueConf([0.2]).values() == [0.2]
    assert ResidueChange([0.3]).values() == [0.3]


def test_residue_increment_and_null():
    res = ResidueConf([0.2, 0.4])
    res.increment(ResidueChange([0.1, 0.1]), 1.0)
    assert res.torsions == pytest.approx([0.3, 0.5])
    res.set_to_null()
    assert res.torsions == [0.0, 0.0]


def test_conf_increment_then_set_to_null():
    size = _size()
    conf = Conf(size)
    change = Change(size)
    for i in range(len(change)):
        change[i] = 0.1
    conf.increment(change, 1.0)
    assert conf.ligands[0].torsions == pytest.approx([0.1, 0.1])
    assert conf.flex[1].torsions == pytest.approx([0.1] * 4)
    conf.set_to_null()
    assert conf.values() == pytest.approx([0.0] * len(change))


def test_conf_randomize_deterministic_and_bounded():
    size = _size()
    a, b = Conf(size), Conf(size)
    a.randomize((0.0, 0.0, 0.0), (1.0, 1.0, 1.0), make_rng(42))
    b.randomize((0.0, 0.0, 0.0), (1.0, 1.0, 1.0), make_rng(42))
    assert a.values() == b.values()
    for lig in a.ligands:
        assert all(0.0 <= x <= 1.0 for x in lig.rigid.position)
        assert all(-math.pi <= t <= math.pi for t in lig.torsions)


def test_conf_too_close():
    size = _size()
    cutoff = Scale(1.0, 0.5, 0.5)
    a = Conf(size)
    b = copy.deepcopy(a)
    assert a.too_close(b, cutoff)
    b.flex[0].torsions[0] = 2.0
    assert a.internal_too_close(b, cutoff.torsion)
    assert not a.external_too_close(b, cutoff)
    assert not a.too_close(b, cutoff)
    c = copy.deepcopy(a)
    c.ligands[1].torsions[2] = 2.0
    assert not a.internal_too_close(c, cutoff.torsion)


def test_conf_too_close_size_mismatch():
    with pytest.raises(ValueError):
        Conf(ConfSize([1], [])).internal_too_close(Conf(ConfSize([1, 1], [])), 0.1)


def test_generate_internal_resets_rigid():
    size = _size()
    conf = Conf(size)
    conf.randomize((0.0, 0.0, 0.0), (1.0, 1.0, 1.0), make_rng(1))
    reference = Conf(size)
    reference.randomize((0.0, 0.0, 0.0), (1.0, 1.0, 1.0), make_rng(2))
    conf.generate_internal(0.5, 1.0, reference, make_rng(3))
    for lig, ref in zip(conf.ligands, reference.ligands):
        assert lig.rigid.position == (0.0, 0.0, 0.0)
        assert lig.rigid.orientation == QT_IDENTITY
        assert lig.torsions == ref.torsions


def test_output_type_sorting():
    outputs = [OutputType(Conf(), e) for e in (3.0, -1.0, 2.0)]
    assert [o.e for o in sorted(outputs)] == [-1.0, 2.0, 3.0]
    assert OutputType(Conf(), -1.0) < OutputType(Conf(), 0.0)