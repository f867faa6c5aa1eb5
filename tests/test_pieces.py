import random

import numpy as np
import pytest

from block_blast.game import CATALOG, COLOR_RGB, Color, PieceGenerator, ShapeTemplate
from block_blast.game.pieces import template_by_id


def test_catalog_has_the_nine_reference_shapes():
    ids = [t.id for t in CATALOG]
    assert ids == [
        "single",
        "horizontal2",
        "horizontal3",
        "vertical2",
        "vertical3",
        "square",
        "l_shape",
        "reversed_l",
        "t_shape",
    ]
    sizes = {t.id: t.size for t in CATALOG}
    assert sizes["single"] == 1
    assert sizes["square"] == 4
    assert sizes["l_shape"] == sizes["reversed_l"] == 3
    assert sizes["t_shape"] == 4


def test_template_dimensions_follow_footprint():
    t = template_by_id("t_shape")
    assert (t.height, t.width) == (2, 3)
    assert t.cells == frozenset({(0, 0), (0, 1), (0, 2), (1, 1)})
    h3 = template_by_id("horizontal3")
    assert (h3.height, h3.width) == (1, 3)
    v3 = template_by_id("vertical3")
    assert (v3.height, v3.width) == (3, 1)


def test_from_mask_trims_empty_border():
    mask = np.array([[0, 0, 0], [0, 1, 1], [0, 0, 1]])
    t = ShapeTemplate.from_mask("corner", mask)
    assert (t.height, t.width) == (2, 2)
    assert t.cells == frozenset({(0, 0), (0, 1), (1, 1)})
    np.testing.assert_array_equal(t.mask(), np.array([[1, 1], [0, 1]]))


def test_template_validation():
    with pytest.raises(ValueError):
        ShapeTemplate("empty", frozenset(), 1, 1)
    with pytest.raises(ValueError):
        ShapeTemplate("outside", frozenset({(0, 2)}), 2, 1)
    with pytest.raises(ValueError):
        ShapeTemplate.from_mask("zeros", np.zeros((2, 2)))


def test_palette_has_seven_colours_and_none_is_zero():
    assert len(Color) == 7
    assert 0 not in {int(c) for c in Color}
    assert set(COLOR_RGB) == set(Color)


def test_generator_is_deterministic_for_a_seed():
    a = PieceGenerator(random.Random(7))
    b = PieceGenerator(random.Random(7))
    seq_a = [(p.template.id, p.color) for p in (a.random_piece() for _ in range(20))]
    seq_b = [(p.template.id, p.color) for p in (b.random_piece() for _ in range(20))]
    assert seq_a == seq_b


def test_generator_instance_ids_are_unique():
    gen = PieceGenerator(random.Random(1))
    ids = [gen.random_piece().instance_id for _ in range(50)]
    assert len(set(ids)) == 50
    assert ids == sorted(ids)


def test_generator_draws_from_whole_catalog_and_palette():
    gen = PieceGenerator(random.Random(3))
    pieces = [gen.random_piece() for _ in range(500)]
    assert {p.template for p in pieces} == set(CATALOG)
    assert {p.color for p in pieces} == set(Color)


def test_cells_at_offsets_from_anchor(make_piece):
    piece = make_piece("l_shape")
    assert sorted(piece.cells_at(4, 6)) == [(4, 6), (5, 6), (5, 7)]


def test_make_piece_unknown_shape():
    with pytest.raises(KeyError):
        PieceGenerator().make_piece("pentomino")
