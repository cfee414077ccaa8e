"""实体模型与状态切换规划测试"""

import pytest

from autopath.config.models import ObstacleDefaultsConfig
from autopath.core.entity_model import (
    Entity,
    SnapshotPosition,
    entity_footprint,
    obstacle_from_entity,
    obstacles_for_snapshot,
)
from autopath.core.types import Obstacle, ObstacleKind, PlanStatus, Point2D


def _entity(eid, kind, positions, active=None, **kwargs):
    return Entity(
        id=eid,
        kind=kind,
        snapshot_positions={sid: SnapshotPosition(*pos) for sid, pos in positions.items()},
        active_snapshots=frozenset(active if active is not None else positions),
        **kwargs,
    )


@pytest.fixture
def mover():
    return _entity("m1", "rectangle", {"s1": (0, 0), "s2": (300, 0)}, w=20, h=20)


@pytest.mark.parametrize("entity, expected", [
    (Entity("a", "circle", w=60), 30),
    (Entity("b", "circle", radius=25), 25),
    (Entity("c", "circle"), 50),
    (Entity("d", "rectangle", w=40, h=80), 40),
    (Entity("e", "rectangle"), 50),
    (Entity("f", "custom"), 25),
    (Entity("g", "drone", w=500), 0),
])
def test_entity_footprint(entity, expected):
    assert entity_footprint(entity) == expected


def test_circle_entity_to_obstacle():
    ent = _entity("c", "circle", {"s1": (10, 20)}, w=60, h=40)
    obstacle = obstacle_from_entity(ent, "s1")
    assert obstacle.kind is ObstacleKind.CIRCLE
    assert obstacle.center == Point2D(10, 20)
    assert obstacle.radius_x == 30 and obstacle.radius_y == 20


def test_rectangle_entity_defaults():
    ent = _entity("r", "rectangle", {"s1": (0, 0)})
    obstacle = obstacle_from_entity(ent, "s1")
    assert obstacle.half_width == 50 and obstacle.half_height == 50


def test_custom_entity_scales_vertices():
    path = (Point2D(-10, -10), Point2D(10, -10), Point2D(0, 10))
    ent = _entity("p", "custom", {"s1": (0, 0)}, w=40, h=60, custom_path=path)
    obstacle = obstacle_from_entity(ent, "s1")
    assert obstacle.kind is ObstacleKind.POLYGON
    assert obstacle.scale_x == pytest.approx(2.0)
    assert obstacle.scale_y == pytest.approx(3.0)


def test_agent_entity_is_not_an_obstacle():
    drone = _entity("d", "drone", {"s1": (0, 0)})
    assert obstacle_from_entity(drone, "s1") is None


def test_missing_position_uses_origin():
    ent = _entity("r", "rectangle", {}, active={"s1"}, w=10, h=10)
    obstacle = obstacle_from_entity(ent, "s1", ObstacleDefaultsConfig())
    assert obstacle.center == Point2D(0, 0)


def test_obstacles_for_snapshot_filters(mover):
    entities = [
        mover,
        _entity("o1", "circle", {"s1": (150, 0)}, w=60),
        _entity("o2", "rectangle", {"s1": (150, 200)}, active={"s2"}),
        _entity("d1", "drone", {"s1": (150, 0)}),
        _entity("u1", "tree", {"s1": (150, 0)}),
    ]
    obstacles = obstacles_for_snapshot(mover, "s1", entities)
    assert len(obstacles) == 1
    assert obstacles[0].center == Point2D(150, 0)


def test_entity_from_editor_record():
    ent = Entity.from_dict({
        "id": 7,
        "type": "custom",
        "statePositions": {"s1": {"x": 1, "y": 2, "rotation": 45}, "s2": None},
        "activeStates": ["s1"],
        "w": 30,
        "customPath": [{"x": -5, "y": 0}, {"x": 5, "y": 0}, {"x": 0, "y": 5}],
        "baseAltitude": 12,
    })
    assert ent.id == "7"
    assert ent.kind == "custom"
    assert ent.position_at("s1") == SnapshotPosition(1.0, 2.0, None, 45.0)
    assert ent.position_at("s2") is None
    assert ent.is_active_at("s1") and not ent.is_active_at("s2")
    assert ent.h is None and ent.w == 30
    assert len(ent.custom_path) == 3
    assert ent.base_altitude == 12


# ----------------------------------------------------------------------
# 状态切换规划
# ----------------------------------------------------------------------
def test_transition_routes_around_other_entity(planner, mover, assert_path_clear):
    other = _entity("o1", "circle", {"s1": (150, 0)}, w=60)
    result = planner.plan_for_entity_transition(mover, "s1", "s2", [mover, other])

    assert result.status is PlanStatus.PLANNED
    assert result.method == "astar"
    assert result.path[0] == Point2D(0, 0)
    assert result.path[-1] == Point2D(300, 0)
    # margin = 20/2 + 20
    assert_path_clear(result.path, [Obstacle.circle(150, 0, 30)], 30)


def test_transition_ignores_drones_and_inactive(planner, mover):
    entities = [
        mover,
        _entity("d1", "drone", {"s1": (150, 0)}),
        _entity("o2", "circle", {"s1": (150, 0)}, active={"s2"}, w=60),
    ]
    result = planner.plan_for_entity_transition(mover, "s1", "s2", entities)
    assert result.method == "direct"
    assert result.path == [Point2D(0, 0), Point2D(300, 0)]


def test_transition_missing_snapshot_returns_none(planner, mover):
    assert planner.plan_for_entity_transition(mover, "s1", "s9", [mover]) is None


def test_transition_accepts_editor_records(planner):
    records = [
        {"id": "m1", "type": "circle", "radius": 10,
         "statePositions": {"a": {"x": 0, "y": 0}, "b": {"x": 200, "y": 0}}, "activeStates": ["a", "b"]},
        {"id": "o1", "type": "rectangle", "w": 40, "h": 40,
         "statePositions": {"a": {"x": 100, "y": 0}}, "activeStates": ["a"]},
    ]
    result = planner.plan_for_entity_transition(records[0], "a", "b", records)
    assert result.ok
    assert result.path[0] == Point2D(0, 0)
    assert result.path[-1] == Point2D(200, 0)
    assert len(result.path) > 2


@pytest.mark.parametrize("kind, shape", [
    ("circle", ObstacleKind.CIRCLE),
    ("rectangle", ObstacleKind.RECTANGLE),
    ("custom", ObstacleKind.POLYGON),
    ("polygon", ObstacleKind.POLYGON),
    ("drone", None),
    ("tree", None),
])
def test_entity_shape(kind, shape):
    assert Entity("x", kind).shape is shape


def test_polygon_kind_converts_like_custom():
    path = (Point2D(-10, -10), Point2D(10, -10), Point2D(0, 10))
    ent = _entity("p", "polygon", {"s1": (5, 5)}, w=20, h=20, custom_path=path)
    obstacle = obstacle_from_entity(ent, "s1")
    assert obstacle.kind is ObstacleKind.POLYGON
    assert entity_footprint(ent) == 10


def test_unknown_kind_is_skipped():
    assert obstacle_from_entity(_entity("t", "tree", {"s1": (0, 0)}), "s1") is None
    assert entity_footprint(Entity("t", "tree", w=80)) == 0
