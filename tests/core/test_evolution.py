"""Tests for the evolution engine."""

import pytest

from core.evolution import EventType, EvolutionConfig, EvolutionEngine, RunState
from core.game import RuleSet
from core.random_source import RandomSource
from core.strategy import Strategy


def small_config(**overrides) -> EvolutionConfig:
    params = dict(
        population_size=6,
        generations=3,
        elite_count=1,
        tournament_size=2,
        hands_per_evaluation=40,
        seed=1,
    )
    params.update(overrides)
    return EvolutionConfig(**params)


class TestEvolutionConfig:
    """Tests for EvolutionConfig validation."""

    def test_defaults(self):
        """Test default parameters are valid."""
        config = EvolutionConfig()
        assert config.population_size == 100
        assert config.workers == 1

    @pytest.mark.parametrize(
        "overrides",
        [
            {"population_size": 1},
            {"generations": 0},
            {"elite_count": 6},
            {"tournament_size": 0},
            {"tournament_size": 7},
            {"mutation_rate": 1.5},
            {"mutation_impact": -0.1},
            {"hands_per_evaluation": 0},
            {"workers": 0},
        ],
    )
    def test_invalid(self, overrides):
        """Test invalid combinations raise ValueError."""
        with pytest.raises(ValueError):
            small_config(**overrides)


class TestEvolutionEngine:
    """Tests for EvolutionEngine."""

    def test_run(self):
        """Test a short run reports every generation and finishes."""
        engine = EvolutionEngine(config=small_config(), rules=RuleSet(num_decks=1))
        assert engine.state == RunState.IDLE

        result = engine.run()

        assert engine.state == RunState.FINISHED
        assert [stats.generation for stats in result.history] == [1, 2, 3]
        assert result.best.fitness == max(stats.best for stats in result.history)
        for stats in result.history:
            assert stats.worst <= stats.mean <= stats.best

    def test_run_events(self):
        """Test progress events are published in order."""
        engine = EvolutionEngine(config=small_config())
        seen = []
        engine.subscribe(seen.append)
        evaluated = []
        engine.subscribe(evaluated.append, EventType.GENERATION_EVALUATED)

        engine.run()

        assert seen[0].event_type == EventType.RUN_STARTED
        assert seen[-1].event_type == EventType.RUN_COMPLETED
        assert len(evaluated) == 3
        assert any(event.event_type == EventType.NEW_BEST for event in seen)

    def test_run_only_once(self):
        """Test a finished engine cannot run again."""
        engine = EvolutionEngine(config=small_config(generations=1))
        engine.run()
        with pytest.raises(RuntimeError):
            engine.run()

    def test_seeded_runs_agree(self):
        """Test equal seeds evolve identically."""
        first = EvolutionEngine(config=small_config()).run()
        second = EvolutionEngine(config=small_config()).run()
        assert first.history == second.history
        assert first.best.same_tables(second.best)

    def test_parallel_matches_serial(self):
        """Test process-pool evaluation scores like serial evaluation."""
        serial = EvolutionEngine(config=small_config(generations=1, population_size=4)).run()
        parallel = EvolutionEngine(config=small_config(generations=1, population_size=4, workers=2)).run()
        assert serial.history == parallel.history

    def test_breed_population_keeps_elites(self):
        """Test elites are cloned into the next generation and the size is kept."""
        rng = RandomSource(4)
        engine = EvolutionEngine(config=small_config(elite_count=2), rng=rng)
        ranked = engine.initial_population()
        for i, strategy in enumerate(ranked):
            strategy.fitness = float(len(ranked) - i)

        next_generation = engine.breed_population(ranked)

        assert len(next_generation) == 6
        for elite, original in zip(next_generation[:2], ranked[:2]):
            assert elite is not original
            assert elite.same_tables(original)
        assert all(isinstance(s, Strategy) for s in next_generation)

    def test_tournament_prefers_fitter(self):
        """Test tournament selection favors the fitter strategy."""
        engine = EvolutionEngine(config=small_config(population_size=2, elite_count=0, tournament_size=2))
        strong, weak = Strategy(), Strategy()
        strong.fitness, weak.fitness = 10.0, -10.0

        wins = sum(engine.select_parent([strong, weak]) is strong for _ in range(400))
        assert wins > 250

    def test_event_history(self):
        """Test the emitter keeps every event in order."""
        engine = EvolutionEngine(config=small_config(generations=1))
        engine.run()
        kinds = [event.event_type for event in engine.events.history]
        assert kinds[:2] == [EventType.RUN_STARTED, EventType.GENERATION_STARTED]
        assert kinds.count(EventType.RUN_COMPLETED) == 1
