"""Tests for the rendering surface on the offscreen Qt platform."""

import pytest
from PySide6.QtCore import QPointF, QRectF

from conftest import make_board
from seiti.model.board import Move, Stone, Territory
from seiti.model.moves import MoveIndex
from seiti.model.projection import AnimationPhase, Projection, StoneMarker, TerritoryMarker, project
from seiti.view.board_scene import BoardScene, StoneItem

MOVE = Move(color=Stone.BLACK, origin=(0, 0), destination=(5, 5))


@pytest.fixture
def boards():
    before = make_board(stones={(0, 0): Stone.BLACK, (3, 3): Stone.WHITE})
    after = make_board(
        stones={(5, 5): Stone.BLACK, (3, 3): Stone.WHITE},
        territory={(0, 0): Territory.BLACK, (18, 18): Territory.WHITE},
    )
    return before, after, MoveIndex.from_moves([MOVE])


def _at(phase, boards):
    before, after, index = boards
    return project(after, before, index, phase)


class TestGrid:
    def test_scene_rect_has_margin(self, qapp) -> None:
        scene = BoardScene(size=19)
        assert scene.board_size == 19
        assert scene.sceneRect() == QRectF(-1, -1, 20, 20)

    def test_same_size_is_not_redrawn(self, qapp) -> None:
        scene = BoardScene(size=19)
        count = len(scene.items())
        scene.draw_grid(19)
        assert len(scene.items()) == count

    def test_resize_replaces_grid(self, qapp) -> None:
        scene = BoardScene(size=19)
        big = len(scene.items())
        scene.draw_grid(9)
        assert scene.board_size == 9
        assert scene.sceneRect() == QRectF(-1, -1, 10, 10)
        assert len(scene.items()) < big


class TestProjection:
    def test_territory_items(self, qapp) -> None:
        scene = BoardScene()
        scene.set_projection(Projection(territory_markers=(
            TerritoryMarker((0, 0), Territory.BLACK),
            TerritoryMarker((4, 2), Territory.WHITE),
        )))
        items = scene.territory_items()
        assert [item.data(0) for item in items] == [int(Territory.BLACK), int(Territory.WHITE)]
        assert items[1].rect().center() == QPointF(4, 2)

    def test_territory_is_replaced(self, qapp) -> None:
        scene = BoardScene()
        scene.set_projection(Projection(territory_markers=(TerritoryMarker((0, 0), Territory.BLACK),)))
        scene.set_projection(Projection.EMPTY)
        assert scene.territory_items() == []

    def test_stones_are_positioned(self, qapp) -> None:
        scene = BoardScene()
        scene.set_projection(Projection(stone_markers=(StoneMarker((2, 7), Stone.WHITE),)))
        item = scene.stone_items()[(2, 7)]
        assert isinstance(item, StoneItem)
        assert item.color is Stone.WHITE
        assert item.pos() == QPointF(2, 7)

    def test_vanished_stones_are_removed(self, qapp) -> None:
        scene = BoardScene()
        scene.set_projection(Projection(stone_markers=(StoneMarker((2, 7), Stone.WHITE),)))
        item = scene.stone_items()[(2, 7)]
        scene.clear_board()
        assert dict(scene.stone_items()) == {}
        assert item.scene() is None

    def test_colour_change_reuses_item(self, qapp) -> None:
        scene = BoardScene()
        scene.set_projection(Projection(stone_markers=(StoneMarker((1, 1), Stone.WHITE),)))
        item = scene.stone_items()[(1, 1)]
        scene.set_projection(Projection(stone_markers=(StoneMarker((1, 1), Stone.BLACK),)))
        assert scene.stone_items()[(1, 1)] is item
        assert item.color is Stone.BLACK


class TestReplaySequence:
    def test_same_item_travels_from_origin_to_destination(self, qapp, boards) -> None:
        scene = BoardScene(transition_ms=0)

        scene.set_projection(_at(AnimationPhase.PENDING, boards))
        mover = scene.stone_items()[(0, 0)]
        assert mover.pos() == QPointF(0, 0)

        scene.set_projection(_at(AnimationPhase.ANIMATING, boards))
        assert scene.stone_items()[(0, 0)] is mover
        assert mover.pos() == QPointF(0, 0)

        scene.apply_destinations()
        assert mover.pos() == QPointF(5, 5)
        assert mover.destination == QPointF(5, 5)

        # Idle: the final board, keyed by where stones now are
        scene.set_projection(_at(AnimationPhase.IDLE, boards))
        assert set(scene.stone_items()) == {(5, 5), (3, 3)}
        assert scene.stone_items()[(5, 5)].pos() == QPointF(5, 5)

    def test_only_transitioning_stones_move(self, qapp, boards) -> None:
        scene = BoardScene(transition_ms=0)
        scene.set_projection(_at(AnimationPhase.ANIMATING, boards))
        still = scene.stone_items()[(3, 3)]
        scene.apply_destinations()
        assert still.pos() == QPointF(3, 3)
        assert still.destination is None

    def test_pending_commit_moves_nothing(self, qapp, boards) -> None:
        scene = BoardScene(transition_ms=0)
        scene.set_projection(_at(AnimationPhase.PENDING, boards))
        scene.apply_destinations()
        assert scene.stone_items()[(0, 0)].pos() == QPointF(0, 0)

    def test_eased_transition(self, qapp, boards) -> None:
        scene = BoardScene(transition_ms=800)
        scene.set_projection(_at(AnimationPhase.ANIMATING, boards))
        mover = scene.stone_items()[(0, 0)]

        scene.apply_destinations()
        assert mover.is_transitioning()

        mover.finish_transition()
        assert not mover.is_transitioning()
        assert mover.pos() == QPointF(5, 5)

    def test_reprojection_stops_transition(self, qapp, boards) -> None:
        scene = BoardScene(transition_ms=800)
        scene.set_projection(_at(AnimationPhase.ANIMATING, boards))
        mover = scene.stone_items()[(0, 0)]
        scene.apply_destinations()

        scene.set_projection(_at(AnimationPhase.ANIMATING, boards))

        assert not mover.is_transitioning()
        assert mover.pos() == QPointF(0, 0)
        assert mover.destination is None
