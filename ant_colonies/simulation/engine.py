"""Step engine, termination policy, and run loop for the ant colony simulation.

Each tick is computed in three phases against tick-start state and applied as
one unit:

1. Propose: every active ant picks a random tunnel of its colony. Proposals are
   grouped per target colony. A target claimed by two or more participants
   (claimants plus any tick-start resident) is a fight; a lone claimant on an
   empty colony becomes a move intent.
2. Resolve: fought-over colonies are destroyed and every tunnel into them is
   removed from the graph.
3. Apply: fighters are removed, then surviving move intents are committed.

The end state of a tick does not depend on the order ants are visited in.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from random import Random

from ant_colonies.config.types import RunResult, SimulationConfig, TerminationReason
from ant_colonies.domain.ant import Ant
from ant_colonies.domain.colony import Colony, Topology
from ant_colonies.domain.errors import InvalidColonyError, NoAntsError, NoColoniesError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FightEvent:
    """A colony destroyed by colliding ants during one tick."""

    step: int
    colony: int
    colony_name: str
    ants: tuple[int, ...]

    def message(self) -> str:
        names = [f"ant {ant_id}" for ant_id in self.ants]
        if len(names) > 1:
            joined = ", ".join(names[:-1]) + f" and {names[-1]}"
        else:
            joined = names[0]
        return f"{self.colony_name} has been destroyed by {joined}!"


@dataclass(frozen=True)
class StepSummary:
    """Per-tick counters reported to run-loop observers."""

    step: int
    moves: int
    fights: int
    active_ants: int
    surviving_colonies: int


class Simulation:
    """Ants walking a tunnel graph, destroying colonies where they collide."""

    def __init__(
        self,
        colonies: Sequence[Colony],
        num_ants: int,
        config: SimulationConfig | None = None,
        rng: Random | None = None,
    ) -> None:
        if not colonies:
            raise NoColoniesError()
        if num_ants < 1:
            raise NoAntsError()

        self.config = config or SimulationConfig()
        self.rng = rng if rng is not None else Random(self.config.seed)
        self.colonies: list[Colony] = list(colonies)
        self.ants: list[Ant] = []
        self.step_count = 0
        self.fights: list[FightEvent] = []
        self._surviving = sum(1 for colony in self.colonies if not colony.destroyed)

        # Per-tick scratch, cleared rather than reallocated every tick.
        self._occupants: dict[int, list[int]] = {}
        self._claims: dict[int, list[int]] = {}
        self._moves: list[tuple[int, int, int]] = []
        self._doomed_colonies: list[int] = []
        self._doomed_ants: list[int] = []

        n_colonies = len(self.colonies)
        for ant_id in range(num_ants):
            colony_idx = self.rng.randrange(n_colonies)
            self.colonies[colony_idx].resident = ant_id
            self.ants.append(Ant(ant_id=ant_id, colony=colony_idx))

    @property
    def max_moves(self) -> int:
        return self.config.max_moves

    @property
    def max_steps(self) -> int:
        return self.config.max_steps

    def has_active_ants(self) -> bool:
        max_moves = self.config.max_moves
        return any(ant.is_active(max_moves) for ant in self.ants)

    def active_ant_count(self) -> int:
        max_moves = self.config.max_moves
        return sum(1 for ant in self.ants if ant.is_active(max_moves))

    def _colony(self, index: int, referrer: str | None = None) -> Colony:
        if not 0 <= index < len(self.colonies):
            raise InvalidColonyError(index, referrer)
        return self.colonies[index]

    def step(self) -> StepSummary:
        """Advance one tick: propose, resolve destruction, apply."""
        occupants = self._occupants
        claims = self._claims
        moves = self._moves
        doomed_colonies = self._doomed_colonies
        doomed_ants = self._doomed_ants
        occupants.clear()
        claims.clear()
        moves.clear()
        doomed_colonies.clear()
        doomed_ants.clear()

        max_moves = self.config.max_moves
        rng = self.rng
        fights_before = len(self.fights)

        # Phase 1a: tick-start occupancy, and proposals from active ants
        for ant in self.ants:
            colony_idx = ant.colony
            if colony_idx is None:
                continue
            colony = self._colony(colony_idx, f"ant {ant.ant_id}")
            occupants.setdefault(colony_idx, []).append(ant.ant_id)
            if ant.moves >= max_moves:
                continue
            direction = colony.random_direction(rng)
            if direction is None:
                continue
            target_idx = colony.target(direction)
            if target_idx is None or target_idx == colony_idx:
                continue
            if self._colony(target_idx, colony.name).destroyed:
                continue
            claims.setdefault(target_idx, []).append(ant.ant_id)

        # Co-located ants (only possible straight after placement) fight in place
        for colony_idx, residents in occupants.items():
            if len(residents) > 1 and colony_idx not in claims:
                self._record_fight(colony_idx, residents)

        # Phase 1b: classify claims
        for target_idx, claimants in claims.items():
            participants = occupants.get(target_idx, []) + claimants
            if len(participants) > 1:
                self._record_fight(target_idx, sorted(participants))
            else:
                ant_id = claimants[0]
                source_idx = self.ants[ant_id].colony
                moves.append((ant_id, source_idx, target_idx))  # type: ignore[arg-type]

        # Phase 2: destroy fought-over colonies and sever every tunnel into them
        if doomed_colonies:
            for colony_idx in doomed_colonies:
                self.colonies[colony_idx].mark_destroyed()
                self._surviving -= 1
            doomed = set(doomed_colonies)
            for colony in self.colonies:
                if colony.destroyed or not colony.tunnel_count:
                    continue
                for _, target_idx in colony.tunnels():
                    if target_idx in doomed:
                        colony.remove_tunnel_to(target_idx)

        # Phase 3: remove fighters, then commit surviving moves
        for ant_id in doomed_ants:
            ant = self.ants[ant_id]
            if ant.colony is not None:
                home = self.colonies[ant.colony]
                if home.resident == ant_id:
                    home.resident = None
                ant.colony = None

        applied = 0
        for ant_id, source_idx, target_idx in moves:
            ant = self.ants[ant_id]
            target = self.colonies[target_idx]
            if target.destroyed or ant.colony is None:
                continue
            source = self.colonies[source_idx]
            if source.resident == ant_id:
                source.resident = None
            target.resident = ant_id
            ant.colony = target_idx
            ant.moves += 1
            applied += 1

        summary = StepSummary(
            step=self.step_count,
            moves=applied,
            fights=len(self.fights) - fights_before,
            active_ants=self.active_ant_count(),
            surviving_colonies=self._surviving,
        )
        self.step_count += 1
        return summary

    def _record_fight(self, colony_idx: int, ant_ids: Sequence[int]) -> None:
        colony = self.colonies[colony_idx]
        event = FightEvent(
            step=self.step_count,
            colony=colony_idx,
            colony_name=colony.name,
            ants=tuple(ant_ids),
        )
        self.fights.append(event)
        self._doomed_colonies.append(colony_idx)
        self._doomed_ants.extend(ant_ids)
        if self.config.debug:
            logger.info(event.message())

    def run(self, on_step: Callable[[StepSummary], None] | None = None) -> RunResult:
        """Step until no ant is active or the step cap is reached."""
        reason = TerminationReason.CONCLUDED
        while self.has_active_ants():
            summary = self.step()
            if on_step is not None:
                on_step(summary)
            if summary.active_ants == 0:
                break
            if self.step_count >= self.config.max_steps:
                reason = TerminationReason.STEP_CAP
                if self.config.debug:
                    logger.info("Simulation stopped after %d steps", self.config.max_steps)
                break

        return RunResult(
            termination_reason=reason,
            steps=self.step_count,
            active_ants=self.active_ant_count(),
            surviving_ants=sum(1 for ant in self.ants if ant.alive),
            surviving_colonies=self._surviving,
            fights=len(self.fights),
        )

    def final_topology(self) -> Topology:
        """Non-destroyed colonies with their surviving tunnels, in index order."""
        topology: Topology = []
        for colony in self.colonies:
            if colony.destroyed:
                continue
            tunnels = [
                (direction.label, self.colonies[target_idx].name)
                for direction, target_idx in colony.tunnels()
            ]
            topology.append((colony.name, tunnels))
        return topology


__all__ = [
    "FightEvent",
    "Simulation",
    "StepSummary",
    "Topology",
]
