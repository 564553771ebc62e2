"""
Skill score aggregation over a learner's graded writing history.

This is a pure computation module with no I/O.
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from scribe.application.utils.numbers import round_half_up
from scribe.domain.constants import (
    DECAY_ALPHA,
    RANK_SCORES,
    RANK_THRESHOLDS,
    SKILL_WEIGHTS,
    TREND_MIN_WRITINGS,
    TREND_THRESHOLD,
    TREND_WINDOW,
)
from scribe.domain.models import GradedWriting, Rank, SkillAxis, Trend, WritingSkillScore

logger = logging.getLogger(__name__)


def rank_to_score(rank: Rank) -> int:
    """Canonical score of a rank on the 500-1000 scale."""
    return RANK_SCORES[Rank(rank).value]


def score_to_rank(score: float) -> Rank:
    """
    Map a (possibly non-canonical) score to a rank.

    Band bounds are the midpoints between canonical scores, lower bound
    inclusive; anything under 525 is D.
    """
    for lower_bound, rank in RANK_THRESHOLDS:
        if score >= lower_bound:
            return Rank(rank)
    return Rank.D


def rank_tier(rank: Rank) -> str:
    """Letter tier of a rank: "A+", "A" and "A-" are all "A"."""
    return Rank(rank).value[0]


class SkillScoreCalculator:
    """
    Computes a WritingSkillScore from graded writings.

    Stateless and side-effect free.
    """

    def __init__(self, alpha: float = DECAY_ALPHA):
        """
        Args:
            alpha: Decay rate; the writing at position i (0 = newest) weighs (1 - alpha) ** i.
        """
        self.alpha = alpha

    def aggregate(
        self,
        writings: Sequence[GradedWriting],
        current_streak: int,
        now: datetime,
    ) -> WritingSkillScore:
        """
        Aggregate writings into per-axis ranks, an overall rank and a trend.

        Writings may come in any order. `current_streak` is passed through as-is.
        """
        if not writings:
            return WritingSkillScore(
                overall_rank=Rank.D,
                grammar_rank=Rank.D,
                vocabulary_rank=Rank.D,
                structure_rank=Rank.D,
                content_rank=Rank.D,
                total_writings=0,
                current_streak=current_streak,
                trend=Trend.STABLE,
                computed_at=now,
            )

        ordered = sorted(writings, key=lambda w: w.created_at, reverse=True)

        axis_scores = self._compute_axis_scores(ordered)
        overall_score = self._combine_axes(axis_scores)
        trend = self._compute_trend(ordered)

        logger.debug(
            "Aggregated %d writings: axes=%s overall=%d trend=%s",
            len(ordered),
            {axis.value: score for axis, score in axis_scores.items()},
            overall_score,
            trend.value,
        )

        return WritingSkillScore(
            overall_rank=score_to_rank(overall_score),
            grammar_rank=score_to_rank(axis_scores[SkillAxis.GRAMMAR]),
            vocabulary_rank=score_to_rank(axis_scores[SkillAxis.VOCABULARY]),
            structure_rank=score_to_rank(axis_scores[SkillAxis.STRUCTURE]),
            content_rank=score_to_rank(axis_scores[SkillAxis.CONTENT]),
            total_writings=len(writings),
            current_streak=current_streak,
            trend=trend,
            computed_at=now,
        )

    def _compute_axis_scores(self, ordered: list[GradedWriting]) -> dict[SkillAxis, int]:
        """
        Exponentially decayed average per axis, newest writing at full weight.
        """
        weights = [(1 - self.alpha) ** i for i in range(len(ordered))]
        weight_sum = sum(weights)

        scores: dict[SkillAxis, int] = {}
        for axis in SkillAxis:
            total = sum(
                rank_to_score(w.feedback.rank_for(axis)) * weight
                for w, weight in zip(ordered, weights)
            )
            scores[axis] = round_half_up(total / weight_sum)
        return scores

    def _combine_axes(self, axis_scores: dict[SkillAxis, int]) -> int:
        """
        Weighted sum of the decayed axis scores.

        Per-writing overall ranks are not used here.
        """
        return round_half_up(
            sum(axis_scores[axis] * SKILL_WEIGHTS[axis.value] for axis in SkillAxis)
        )

    def _compute_trend(self, ordered: list[GradedWriting]) -> Trend:
        """
        Compare the mean overall score of the latest writings with the ones just before.

        Unweighted; needs at least three writings.
        """
        if len(ordered) < TREND_MIN_WRITINGS:
            return Trend.STABLE

        window = min(TREND_WINDOW, len(ordered) // 2)
        recent = ordered[:window]
        older = ordered[window : window * 2]

        if not older:
            return Trend.STABLE

        diff = self._mean_overall(recent) - self._mean_overall(older)
        if diff > TREND_THRESHOLD:
            return Trend.UP
        if diff < -TREND_THRESHOLD:
            return Trend.DOWN
        return Trend.STABLE

    @staticmethod
    def _mean_overall(writings: list[GradedWriting]) -> float:
        return sum(rank_to_score(w.feedback.overall_rank) for w in writings) / len(writings)


def aggregate(
    writings: Sequence[GradedWriting],
    current_streak: int,
    now: datetime,
) -> WritingSkillScore:
    """Aggregate with the default decay rate."""
    return SkillScoreCalculator().aggregate(writings, current_streak, now)
