"""
Stroop colour-word interference test.

Trial types:
    congruent    the word names its own ink colour (RED in red)
    incongruent  the word names a different colour (RED in blue)
    neutral      a non-colour word in coloured ink (TABLE in red)

    interference effect = mean RT(incongruent) − mean RT(congruent)
    facilitation effect = mean RT(neutral) − mean RT(congruent)

Reaction-time statistics use correct responses only.

Reference: Stroop, J.R. (1935), J. Exp. Psychol. 18(6).
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

import numpy as np

from iecalc import config
from iecalc.errors import RangeViolationError

logger = logging.getLogger(__name__)


class TrialType(str, Enum):
    CONGRUENT = "congruent"
    INCONGRUENT = "incongruent"
    NEUTRAL = "neutral"


# colour -> displayed word
COLORS: Dict[str, str] = {
    'red': 'RED',
    'blue': 'BLUE',
    'green': 'GREEN',
    'yellow': 'YELLOW',
}

NEUTRAL_WORDS = ('TABLE', 'CHAIR', 'HOUSE', 'TREE', 'BOOK', 'DOOR', 'LAMP', 'DESK')

COLOR_KEYS: Dict[str, str] = {
    'red': 'R',
    'blue': 'B',
    'green': 'G',
    'yellow': 'Y',
}


@dataclass
class StroopTrial:
    id: str
    type: TrialType
    word: str
    ink_color: str
    correct_answer: str
    user_answer: Optional[str] = None
    response_time: Optional[float] = None  # ms
    correct: Optional[bool] = None
    timestamp: float = 0.0

    @property
    def completed(self) -> bool:
        return self.response_time is not None and self.correct is not None

    def record_response(self, answer: str, response_time: float, timestamp: float = 0.0) -> None:
        self.user_answer = answer
        self.response_time = response_time
        self.correct = answer == self.correct_answer
        self.timestamp = timestamp


@dataclass(frozen=True)
class TypeResult:
    trials: int
    correct: int
    accuracy: float  # percent
    mean_rt: float
    median_rt: float
    std_rt: float
    min_rt: float
    max_rt: float


@dataclass(frozen=True)
class StroopResult:
    total_trials: int
    by_type: Dict[TrialType, TypeResult]
    interference_effect: float
    facilitation_effect: float
    overall_accuracy: float
    overall_mean_rt: float
    interpretation: str


def _pick(rng: np.random.Generator, options: Sequence[str]) -> str:
    return options[int(rng.integers(len(options)))]


def generate_trial(
    trial_type: TrialType,
    trial_id: str = '',
    rng: Optional[np.random.Generator] = None,
) -> StroopTrial:
    if rng is None:
        rng = config.make_rng()
    trial_type = TrialType(trial_type)
    colors = list(COLORS)

    if trial_type == TrialType.CONGRUENT:
        ink = _pick(rng, colors)
        word = COLORS[ink]
    elif trial_type == TrialType.INCONGRUENT:
        word_color = _pick(rng, colors)
        ink = _pick(rng, [c for c in colors if c != word_color])
        word = COLORS[word_color]
    else:
        word = _pick(rng, NEUTRAL_WORDS)
        ink = _pick(rng, colors)

    return StroopTrial(id=trial_id, type=trial_type, word=word, ink_color=ink, correct_answer=ink)


def generate_trial_set(
    trials_per_type: int = 10,
    rng: Optional[np.random.Generator] = None,
) -> List[StroopTrial]:
    """Balanced set with trials_per_type of each condition, in shuffled order."""
    if trials_per_type < 1:
        raise RangeViolationError("At least 1 trial per type is required")
    if rng is None:
        rng = config.make_rng()

    trials = [
        generate_trial(trial_type, f"{trial_type.value}-{i}", rng)
        for trial_type in TrialType
        for i in range(trials_per_type)
    ]
    order = rng.permutation(len(trials))
    return [trials[i] for i in order]


def _type_result(trials: List[StroopTrial]) -> TypeResult:
    correct_rts = np.array([t.response_time for t in trials if t.correct], dtype=float)
    n = len(trials)
    n_correct = int(correct_rts.size)
    accuracy = (n_correct / n) * 100 if n > 0 else 0.0

    if n_correct == 0:
        return TypeResult(n, 0, accuracy, 0.0, 0.0, 0.0, 0.0, 0.0)

    return TypeResult(
        trials=n,
        correct=n_correct,
        accuracy=accuracy,
        mean_rt=float(correct_rts.mean()),
        median_rt=float(np.median(correct_rts)),
        std_rt=float(correct_rts.std(ddof=1)) if n_correct > 1 else 0.0,
        min_rt=float(correct_rts.min()),
        max_rt=float(correct_rts.max()),
    )


def _interpretation(interference: float) -> str:
    if interference > 100:
        return (
            f"Strong Stroop interference effect ({interference:.0f}ms). "
            "Incongruent trials took significantly longer, demonstrating classic cognitive interference."
        )
    if interference > 50:
        return (
            f"Moderate Stroop interference effect ({interference:.0f}ms). "
            "The expected pattern of slower responses for incongruent trials is present."
        )
    if interference > 0:
        return (
            f"Mild Stroop interference effect ({interference:.0f}ms). "
            "Some interference is present but less than typically observed."
        )
    return (
        "No Stroop interference effect detected. "
        "This is unusual and may indicate practice effects or response strategy."
    )


def analyze_stroop_results(trials: Sequence[StroopTrial]) -> StroopResult:
    """
    Summarize completed trials by condition.

    Trials without a response are ignored. Accuracy counts every completed
    trial; RT statistics and the effects use correct responses only.
    """
    completed = [t for t in trials if t.completed]

    by_type = {
        trial_type: _type_result([t for t in completed if t.type == trial_type])
        for trial_type in TrialType
    }

    interference = by_type[TrialType.INCONGRUENT].mean_rt - by_type[TrialType.CONGRUENT].mean_rt
    facilitation = by_type[TrialType.NEUTRAL].mean_rt - by_type[TrialType.CONGRUENT].mean_rt

    correct = [t for t in completed if t.correct]
    overall_accuracy = (len(correct) / len(completed)) * 100 if completed else 0.0
    overall_mean_rt = float(np.mean([t.response_time for t in correct])) if correct else 0.0

    logger.debug("Stroop analysis: %d completed trials, interference %.1f ms", len(completed), interference)

    return StroopResult(
        total_trials=len(completed),
        by_type=by_type,
        interference_effect=interference,
        facilitation_effect=facilitation,
        overall_accuracy=overall_accuracy,
        overall_mean_rt=overall_mean_rt,
        interpretation=_interpretation(interference),
    )


def color_key(color: str) -> str:
    return COLOR_KEYS[color]


def color_from_key(key: str) -> Optional[str]:
    upper = key.upper()
    for color, k in COLOR_KEYS.items():
        if k == upper:
            return color
    return None
