"""Tests for the step engine, termination policy, and reporter."""

from __future__ import annotations

import logging
from random import Random

import pytest

from ant_colonies.config.types import SimulationConfig, TerminationReason
from ant_colonies.domain.colony import Colony, Direction
from ant_colonies.domain.errors import InvalidColonyError, NoAntsError, NoColoniesError
from ant_colonies.simulation.engine import FightEvent, Simulation, StepSummary


def _colony(name: str, **tunnels: int) -> Colony:
    colony = Colony(name=name)
    for direction, target in tunnels.items():
        colony.add_tunnel(Direction.parse(direction), target)
    return colony


def _place(sim: Simulation, placement: dict[int, int]) -> None:
    """Override random placement with ``{ant_id: colony_index}``."""
    for colony in sim.colonies:
        colony.resident = None
    for ant_id, colony_idx in placement.items():
        sim.ants[ant_id].colony = colony_idx
        sim.colonies[colony_idx].resident = ant_id


def _quiet(**overrides: int) -> SimulationConfig:
    return SimulationConfig(debug=False, **overrides)


def _grid_map(width: int, height: int) -> list[Colony]:
    """Grid where every colony tunnels to its orthogonal neighbours."""
    colonies = [Colony(name=f"c{x}_{y}") for y in range(height) for x in range(width)]
    for y in range(height):
        for x in range(width):
            colony = colonies[y * width + x]
            if y > 0:
                colony.add_tunnel(Direction.NORTH, (y - 1) * width + x)
            if y < height - 1:
                colony.add_tunnel(Direction.SOUTH, (y + 1) * width + x)
            if x < width - 1:
                colony.add_tunnel(Direction.EAST, y * width + x + 1)
            if x > 0:
                colony.add_tunnel(Direction.WEST, y * width + x - 1)
    return colonies


class TestConstruction:
    def test_empty_map_rejected(self) -> None:
        with pytest.raises(NoColoniesError, match="no locations provided"):
            Simulation([], 3)

    @pytest.mark.parametrize("num_ants", [0, -1])
    def test_non_positive_ant_count_rejected(self, num_ants: int) -> None:
        with pytest.raises(NoAntsError, match="no agents requested"):
            Simulation([_colony("A")], num_ants)

    def test_ants_placed_on_existing_colonies(self) -> None:
        colonies = [_colony(f"c{i}") for i in range(5)]
        sim = Simulation(colonies, 20, config=_quiet(), rng=Random(3))
        assert len(sim.ants) == 20
        for ant in sim.ants:
            assert ant.colony is not None and 0 <= ant.colony < 5
            assert ant.moves == 0

    def test_placement_uses_every_colony_eventually(self) -> None:
        colonies = [_colony(f"c{i}") for i in range(4)]
        sim = Simulation(colonies, 200, config=_quiet(), rng=Random(0))
        assert {ant.colony for ant in sim.ants} == {0, 1, 2, 3}

    def test_seed_in_config_makes_runs_repeatable(self) -> None:
        def run_once() -> tuple[list[FightEvent], list[tuple[str, list[tuple[str, str]]]]]:
            config = _quiet(seed=11, max_moves=50, max_steps=500)
            sim = Simulation(_grid_map(4, 4), 6, config=config)
            sim.run()
            return sim.fights, sim.final_topology()

        assert run_once() == run_once()

    def test_defaults_come_from_config(self) -> None:
        sim = Simulation([_colony("A")], 1)
        assert sim.max_moves == 10_000
        assert sim.max_steps == 100_000


class TestScenarios:
    def test_ping_pong_halts_via_move_cap(self) -> None:
        colonies = [_colony("A", north=1), _colony("B", south=0)]
        sim = Simulation(colonies, 1, config=_quiet(max_moves=40), rng=Random(0))
        start = sim.ants[0].colony

        result = sim.run()

        assert result.termination_reason is TerminationReason.CONCLUDED
        assert not result.stopped_early
        assert result.steps == 40
        assert result.fights == 0
        assert sim.ants[0].moves == 40
        # an even number of hops lands back where it started
        assert sim.ants[0].colony == start
        assert sim.final_topology() == [("A", [("north", "B")]), ("B", [("south", "A")])]

    def test_converging_ants_destroy_shared_target(self) -> None:
        colonies = [_colony("A", east=1), _colony("B"), _colony("C", west=1)]
        sim = Simulation(colonies, 2, config=_quiet(), rng=Random(0))
        _place(sim, {0: 0, 1: 2})

        result = sim.run()

        assert result.steps == 1
        assert result.termination_reason is TerminationReason.CONCLUDED
        assert result.active_ants == 0
        assert sim.fights == [FightEvent(step=0, colony=1, colony_name="B", ants=(0, 1))]
        assert sim.colonies[1].destroyed
        assert sim.colonies[0].tunnel_count == 0
        assert sim.colonies[2].tunnel_count == 0
        assert all(ant.colony is None for ant in sim.ants)
        assert sim.final_topology() == [("A", []), ("C", [])]

    def test_tunnel_less_colony_halts_via_step_cap(self) -> None:
        sim = Simulation([_colony("Lonely")], 1, config=_quiet(max_steps=25), rng=Random(0))

        result = sim.run()

        assert result.termination_reason is TerminationReason.STEP_CAP
        assert result.stopped_early
        assert result.steps == 25
        assert result.active_ants == 1
        assert sim.ants[0].moves == 0
        assert sim.final_topology() == [("Lonely", [])]


class TestFights:
    def test_moving_into_occupied_colony_is_a_fight(self) -> None:
        colonies = [_colony("A", north=1), _colony("B")]
        sim = Simulation(colonies, 2, config=_quiet(), rng=Random(0))
        _place(sim, {0: 0, 1: 1})

        summary = sim.step()

        assert summary.fights == 1
        assert sim.fights[0].ants == (0, 1)
        assert sim.colonies[1].destroyed
        assert sim.ants[0].colony is None and sim.ants[1].colony is None
        assert sim.colonies[0].resident is None

    def test_resident_leaving_this_tick_still_fights(self) -> None:
        colonies = [_colony("A", east=1), _colony("B", east=2), _colony("C")]
        sim = Simulation(colonies, 2, config=_quiet(), rng=Random(0))
        _place(sim, {0: 0, 1: 1})

        sim.step()

        assert sim.colonies[1].destroyed
        assert sim.ants[1].colony is None
        # the killed resident's move into C is never applied
        assert sim.colonies[2].resident is None
        assert sim.ants[1].moves == 0

    def test_three_way_collision_kills_every_claimant(self) -> None:
        colonies = [
            _colony("A", south=3),
            _colony("C", east=3),
            _colony("D", north=3),
            _colony("B"),
        ]
        sim = Simulation(colonies, 3, config=_quiet(), rng=Random(0))
        _place(sim, {0: 0, 1: 1, 2: 2})

        sim.step()

        assert len(sim.fights) == 1
        assert sim.fights[0].ants == (0, 1, 2)
        assert sim.fights[0].message() == "B has been destroyed by ant 0, ant 1 and ant 2!"
        assert all(ant.colony is None for ant in sim.ants)

    def test_bystander_unaffected_by_fight(self) -> None:
        colonies = [
            _colony("A", east=1),
            _colony("B"),
            _colony("C", west=1),
            _colony("E", north=4),
            _colony("F"),
        ]
        sim = Simulation(colonies, 3, config=_quiet(), rng=Random(0))
        _place(sim, {0: 0, 1: 2, 2: 3})

        summary = sim.step()

        assert summary.moves == 1
        assert sim.ants[2].colony == 4
        assert sim.ants[2].moves == 1
        assert sim.colonies[4].resident == 2
        assert sim.colonies[3].resident is None
        assert sim.fights[0].ants == (0, 1)

    def test_co_located_start_fights_on_first_tick(self) -> None:
        sim = Simulation([_colony("Only")], 2, config=_quiet(), rng=Random(0))

        result = sim.run()

        assert result.steps == 1
        assert sim.fights[0].ants == (0, 1)
        assert sim.colonies[0].destroyed
        assert sim.final_topology() == []

    def test_ant_at_move_cap_is_still_a_resident(self) -> None:
        colonies = [_colony("A", north=1), _colony("B")]
        sim = Simulation(colonies, 2, config=_quiet(max_moves=5), rng=Random(0))
        _place(sim, {0: 0, 1: 1})
        sim.ants[1].moves = 5

        sim.step()

        assert sim.colonies[1].destroyed
        assert sim.ants[1].colony is None

    def test_self_loop_proposal_does_not_move_or_fight(self) -> None:
        sim = Simulation([_colony("Loop", north=0)], 1, config=_quiet(max_steps=3), rng=Random(0))

        result = sim.run()

        assert result.fights == 0
        assert sim.ants[0].moves == 0
        assert result.termination_reason is TerminationReason.STEP_CAP

    def test_destroyed_colony_never_entered_again(self) -> None:
        colonies = [
            _colony("A", east=1),
            _colony("B", south=3),
            _colony("C", west=1),
            _colony("D", north=1),
        ]
        sim = Simulation(colonies, 2, config=_quiet(), rng=Random(0))
        _place(sim, {0: 0, 1: 2})
        sim.step()
        assert sim.colonies[1].destroyed
        assert sim.colonies[3].tunnel_count == 0

        # a fresh ant in D has nowhere to go
        sim.ants[0].colony = 3
        sim.colonies[3].resident = 0
        for _ in range(10):
            sim.step()
        assert sim.ants[0].colony == 3
        assert sim.colonies[1].resident is None


class TestInvariants:
    @pytest.mark.parametrize("seed", range(6))
    def test_invariants_hold_every_tick(self, seed: int) -> None:
        config = _quiet(max_moves=200, max_steps=2_000)
        sim = Simulation(_grid_map(6, 6), 18, config=config, rng=Random(seed))
        ever_destroyed: set[int] = set()
        last_moves = [0] * len(sim.ants)
        was_removed = [False] * len(sim.ants)

        def check(summary: StepSummary) -> None:
            live_positions = [ant.colony for ant in sim.ants if ant.colony is not None]
            assert len(live_positions) == len(set(live_positions))
            for idx, colony in enumerate(sim.colonies):
                if colony.destroyed:
                    ever_destroyed.add(idx)
                    assert colony.tunnel_count == 0
                    assert colony.resident is None
                else:
                    for _, target in colony.tunnels():
                        assert not sim.colonies[target].destroyed
            assert ever_destroyed == {i for i, c in enumerate(sim.colonies) if c.destroyed}
            for ant in sim.ants:
                assert ant.colony not in ever_destroyed
                assert ant.moves - last_moves[ant.ant_id] in (0, 1)
                if was_removed[ant.ant_id]:
                    assert ant.colony is None
                if ant.colony is not None:
                    assert sim.colonies[ant.colony].resident == ant.ant_id
                last_moves[ant.ant_id] = ant.moves
                was_removed[ant.ant_id] = ant.colony is None
            assert summary.surviving_colonies == len(sim.colonies) - len(ever_destroyed)

        result = sim.run(on_step=check)

        assert result.steps <= sim.max_steps
        assert all(ant.moves <= 200 for ant in sim.ants)

    def test_every_fight_destroys_exactly_its_colony(self) -> None:
        config = _quiet(max_moves=100, max_steps=2_000)
        sim = Simulation(_grid_map(5, 5), 12, config=config, rng=Random(9))
        sim.run()
        fought = [event.colony for event in sim.fights]
        assert len(fought) == len(set(fought))
        assert set(fought) == {i for i, c in enumerate(sim.colonies) if c.destroyed}
        killed = [ant_id for event in sim.fights for ant_id in event.ants]
        assert set(killed) == {ant.ant_id for ant in sim.ants if ant.colony is None}

    def test_run_halts_within_step_cap(self) -> None:
        colonies = [_colony("A", north=1), _colony("B", south=0)]
        sim = Simulation(colonies, 1, config=_quiet(max_steps=7), rng=Random(0))
        result = sim.run()
        assert result.steps == 7
        assert result.termination_reason is TerminationReason.STEP_CAP


class TestInvalidReferences:
    def test_ant_on_missing_colony_is_fatal(self) -> None:
        sim = Simulation([_colony("A")], 1, config=_quiet(), rng=Random(0))
        sim.ants[0].colony = 5
        with pytest.raises(InvalidColonyError) as excinfo:
            sim.step()
        assert excinfo.value.index == 5

    def test_tunnel_to_missing_colony_is_fatal(self) -> None:
        sim = Simulation([_colony("A", north=7)], 1, config=_quiet(), rng=Random(0))
        with pytest.raises(InvalidColonyError) as excinfo:
            sim.run()
        assert excinfo.value.index == 7
        assert excinfo.value.name == "A"


class TestLogging:
    def test_fight_logged_when_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="ant_colonies")
        colonies = [_colony("A", east=1), _colony("B"), _colony("C", west=1)]
        sim = Simulation(colonies, 2, config=SimulationConfig(debug=True), rng=Random(0))
        _place(sim, {0: 0, 1: 2})
        sim.run()
        assert "B has been destroyed by ant 0 and ant 1!" in caplog.messages

    def test_nothing_logged_when_not_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="ant_colonies")
        sim = Simulation([_colony("Only")], 2, config=_quiet(), rng=Random(0))
        sim.run()
        assert caplog.messages == []

    def test_step_cap_logged_when_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="ant_colonies")
        config = SimulationConfig(debug=True, max_steps=3)
        Simulation([_colony("Lonely")], 1, config=config, rng=Random(0)).run()
        assert "Simulation stopped after 3 steps" in caplog.messages


class TestStepSummary:
    def test_summary_reports_step_index_and_counts(self) -> None:
        colonies = [_colony("A", north=1), _colony("B", south=0)]
        sim = Simulation(colonies, 1, config=_quiet(max_moves=3), rng=Random(0))
        summaries: list[StepSummary] = []
        sim.run(on_step=summaries.append)
        assert [s.step for s in summaries] == [0, 1, 2]
        assert all(s.moves == 1 for s in summaries)
        assert summaries[-1].active_ants == 0
        assert all(s.surviving_colonies == 2 for s in summaries)

    def test_manual_steps_advance_step_index(self) -> None:
        colonies = [_colony("A", north=1), _colony("B", south=0)]
        sim = Simulation(colonies, 1, config=_quiet(), rng=Random(0))
        first = sim.step()
        second = sim.step()
        assert (first.step, second.step) == (0, 1)
        assert sim.step_count == 2

    def test_fight_stamped_with_its_tick(self) -> None:
        colonies = [_colony("A", east=1), _colony("B"), _colony("C", west=1), _colony("D")]
        sim = Simulation(colonies, 2, config=_quiet(), rng=Random(0))
        # both ants idle in tunnel-less colonies for one tick before the collision
        _place(sim, {0: 3, 1: 1})
        sim.step()
        _place(sim, {0: 0, 1: 2})
        sim.step()
        assert sim.fights == [FightEvent(step=1, colony=1, colony_name="B", ants=(0, 1))]
