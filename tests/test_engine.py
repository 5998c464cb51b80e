"""Integration tests for the eigenvector ranking engine."""

import numpy as np
import pytest

from eigenrank.analysis.engine import EigenRankEngine
from eigenrank.core.config import RankConfig
from eigenrank.core.constants import DEMO_MATCHES
from eigenrank.core.convert import PlayerRegistry, Tournament
from eigenrank.core.eigen import EigenDecomposition
from eigenrank.core.selection import NoValidRankingError, ZeroGameError


class MixedSignSolver:
    """Solver stub whose every eigenvector mixes signs."""

    name = "mixed"

    def decompose(self, matrix, tolerance):
        size = matrix.shape[0]
        vectors = np.ones((size, size))
        vectors[0, :] = -1.0
        return EigenDecomposition(values=np.arange(size, dtype=float), vectors=vectors)


@pytest.fixture
def demo_tournament() -> Tournament:
    return Tournament.from_pairs(DEMO_MATCHES)


class TestDemoTournament:
    """Rankings for the built-in demo tournament."""

    @pytest.mark.parametrize("solver", ["numpy", "scipy"])
    def test_demo_produces_positive_finite_ranks(self, demo_tournament, solver):
        result = EigenRankEngine(RankConfig(solver=solver)).rank(demo_tournament)
        assert result.players == [
            "bob-r",
            "joe-c",
            "tim-c",
            "joe-r",
            "bob-c",
            "tim-r",
        ]
        assert np.all(np.isfinite(result.ranks))
        assert np.all(result.ranks > 0)

    def test_accepted_vector_is_sign_consistent(self, demo_tournament):
        result = EigenRankEngine().rank(demo_tournament)
        assert np.all(result.eigenvector * result.sense >= 0)

    def test_normalization_invariant(self, demo_tournament):
        result = EigenRankEngine().rank(demo_tournament)
        np.testing.assert_array_equal(
            result.ranks, result.eigenvector * result.sense / result.games
        )

    def test_accepted_eigenvalue_is_dominant(self, demo_tournament):
        engine = EigenRankEngine()
        analysis = engine.analyze(demo_tournament)
        result = engine.rank_analysis(analysis)
        spectral_radius = np.max(np.abs(analysis.decomposition.values))
        assert result.eigenvalue == pytest.approx(spectral_radius)

    def test_dominant_selection_agrees_on_irreducible_matrix(
        self, demo_tournament
    ):
        first = EigenRankEngine().rank(demo_tournament)
        dominant = EigenRankEngine(RankConfig(selection="dominant")).rank(
            demo_tournament
        )
        np.testing.assert_allclose(first.ranks, dominant.ranks)

    def test_ranking_is_repeatable(self, demo_tournament):
        engine = EigenRankEngine()
        np.testing.assert_array_equal(
            engine.rank(demo_tournament).ranks,
            engine.rank(demo_tournament).ranks,
        )

    def test_rescale_spans_unit_interval(self, demo_tournament):
        result = EigenRankEngine(RankConfig(rescale=True)).rank(demo_tournament)
        assert result.min_rank == 0.0
        assert result.max_rank == 1.0


class TestDegenerateTournaments:
    def test_single_match_still_ranks(self):
        result = EigenRankEngine().rank(Tournament.from_pairs([("a", "b")]))
        assert result.ranks.shape == (2,)
        assert np.all(np.isfinite(result.ranks))
        assert result.ranks[0] >= result.ranks[1]
        np.testing.assert_array_equal(result.games, [1.0, 1.0])

    def test_empty_tournament_has_no_ranking(self):
        engine = EigenRankEngine()
        analysis = engine.analyze(Tournament())
        assert analysis.matrix.shape == (0, 0)
        assert len(analysis.decomposition) == 0
        with pytest.raises(NoValidRankingError):
            engine.rank(Tournament())

    def test_mixed_sign_spectrum_has_no_ranking(self, demo_tournament):
        engine = EigenRankEngine(solver=MixedSignSolver())
        with pytest.raises(NoValidRankingError, match="no valid eigenvector"):
            engine.rank(demo_tournament)

    def test_seeded_idle_player_rejected(self):
        tournament = Tournament.from_pairs([("a", "b"), ("b", "a")])
        registry = PlayerRegistry.from_names(["a", "b", "idle"])
        engine = EigenRankEngine(RankConfig(zero_games="reject"))
        with pytest.raises(ZeroGameError):
            engine.rank(tournament, registry)

    def test_plain_iterables_are_accepted(self):
        analysis = EigenRankEngine().analyze([("a", "b"), ("b", "c")])
        assert isinstance(analysis.tournament, Tournament)
        assert analysis.num_players == 3


def test_result_dataframe_in_registry_order(demo_tournament):
    result = EigenRankEngine().rank(demo_tournament)
    frame = result.to_dataframe()
    assert frame.columns == ["player", "rank", "games"]
    assert frame["player"].to_list() == result.players
    assert frame["games"].to_list() == [6, 4, 6, 4, 4, 4]

    top = result.get_top_n(2)
    assert top.height == 2
    assert top["rank"][0] == pytest.approx(result.max_rank)


def test_invalid_config_values():
    with pytest.raises(ValueError):
        RankConfig(selection="largest")
    with pytest.raises(ValueError):
        RankConfig(solver="fortran")
    with pytest.raises(ValueError):
        RankConfig(tolerance=-1.0)
