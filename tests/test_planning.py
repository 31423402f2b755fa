import pytest

from rover_sim.control import RobotState
from rover_sim.planning import Pathfinder, PathResult, PriorityQueue
from rover_sim.robot import Command, Orientation, Pose
from rover_sim.terrain import TerrainMap

F, B = Command.MOVE_FORWARD, Command.MOVE_BACKWARD


def replay(terrain, start, battery, commands):
    """Execute a path on a real robot, checking battery after every step."""
    robot = RobotState(terrain, battery, start)
    for command in commands:
        assert robot.execute_command(command)
        assert robot.battery > 0
    assert robot.backoff_index == 0
    return robot


class TestPriorityQueue:
    def test_lowest_priority_first(self):
        queue = PriorityQueue()
        queue.push("c", 3)
        queue.push("a", 1)
        queue.push("b", 2)
        assert [queue.pop()[0] for _ in range(3)] == ["a", "b", "c"]

    def test_ties_pop_in_insertion_order(self):
        queue = PriorityQueue()
        for item in "xyz":
            queue.push(item, 5)
        assert [queue.pop() for _ in range(3)] == [("x", 5), ("y", 5), ("z", 5)]

    def test_len_and_bool(self):
        queue = PriorityQueue()
        assert not queue
        queue.push(Pose(0, 0, Orientation.EAST), 0)
        assert queue and len(queue) == 1

    def test_pop_empty(self):
        with pytest.raises(IndexError):
            PriorityQueue().pop()


class TestPathfinder:
    def test_straight_ahead(self, open_terrain, start_east):
        result = Pathfinder(open_terrain).find_path(start_east, (3, 0), 50)

        assert result.success
        assert result.commands == (F, F, F)
        assert result.battery == 41
        assert result.final_pose == Pose(3, 0, Orientation.EAST)

    def test_straight_behind_uses_backward(self, open_terrain):
        result = Pathfinder(open_terrain).find_path(Pose(3, 0, Orientation.EAST), (0, 0), 50)

        assert result.commands == (B, B, B)
        assert result.final_pose == Pose(0, 0, Orientation.EAST)

    @pytest.mark.parametrize("start, target", [
        (Pose(0, 0, Orientation.SOUTH), (0, 3)),
        (Pose(2, 3, Orientation.NORTH), (2, 1)),
        (Pose(1, 1, Orientation.WEST), (3, 1)),
    ])
    def test_length_is_manhattan_on_facing_axis(self, open_terrain, start, target):
        result = Pathfinder(open_terrain).find_path(start, target, 50)
        assert len(result) == start.manhattan(*target)

    def test_turn_needed_off_axis(self, open_terrain, start_east):
        result = Pathfinder(open_terrain).find_path(start_east, (2, 2), 50)

        assert result.success
        assert len(result) == 5  # Four moves and one turn
        replay(open_terrain, start_east, 50, result.commands)

    def test_already_there(self, open_terrain, start_east):
        result = Pathfinder(open_terrain).find_path(start_east, (0, 0), 7)

        assert result.success
        assert result.commands == ()
        assert result.battery == 7
        assert result.final_pose == start_east

    def test_routes_around_obstacles(self, start_east):
        terrain = TerrainMap([
            ["Fe", "Obs", "Fe"],
            ["Fe", "Fe", "Fe"],
        ])
        result = Pathfinder(terrain).find_path(start_east, (2, 0), 50)

        assert result.success
        robot = replay(terrain, start_east, 50, result.commands)
        assert robot.pose.cell == (2, 0)
        assert robot.pose == result.final_pose
        assert robot.battery == result.battery

    def test_unreachable(self, start_east):
        terrain = TerrainMap([["Fe", "Obs", "Fe"]])
        result = Pathfinder(terrain).find_path(start_east, (2, 0), 50)

        assert not result.success
        assert result.commands == ()
        assert result.battery == 50
        assert result.final_pose is None

    def test_battery_must_stay_positive(self, start_east):
        terrain = TerrainMap([["Fe"] * 4])

        # Three moves cost 9: ends at 0, which is not allowed
        assert not Pathfinder(terrain).find_path(start_east, (3, 0), 9).success

        result = Pathfinder(terrain).find_path(start_east, (3, 0), 10)
        assert result.success
        assert result.battery == 1

    def test_paths_never_recharge(self, sample_terrain, start_east):
        result = Pathfinder(sample_terrain).find_path(start_east, (1, 1), 50)
        assert Command.EXTEND_PANELS not in result.commands
        replay(sample_terrain, start_east, 50, result.commands)

    def test_wire_format(self, open_terrain, start_east):
        result = Pathfinder(open_terrain).find_path(start_east, (1, 0), 20)
        assert result.to_dict() == {"commands": ["F"], "battery": 17, "success": True}

    def test_failed_keeps_partial_commands(self):
        result = PathResult.failed(12, [Command.SAMPLE])
        assert result.to_dict() == {"commands": ["S"], "battery": 12, "success": False}
