from enum import Enum


class ExecutionGrade(Enum):
    EXACTLY_AS_SPECIFIED = "A"
    ELBOWS_TO_FRONT = "B"
    LIFTING_HALFWAY = "C"
    LOWERING_HALFWAY = "D"
    HIPS_TO_FRONT = "E"


# Best to worst.
GRADE_LEVELS = [grade.value for grade in ExecutionGrade]

GRADE_DESCRIPTIONS = {
    ExecutionGrade.EXACTLY_AS_SPECIFIED: "exactly according to the specification",
    ExecutionGrade.ELBOWS_TO_FRONT: "throwing the elbows to the front",
    ExecutionGrade.LIFTING_HALFWAY: "lifting the dumbbell only halfway",
    ExecutionGrade.LOWERING_HALFWAY: "lowering the dumbbell only halfway",
    ExecutionGrade.HIPS_TO_FRONT: "throwing the hips to the front",
}


def get_grade_description(label: str) -> str:
    try:
        return GRADE_DESCRIPTIONS[ExecutionGrade(label)]
    except ValueError:
        return "unknown"


def ordered_labels(observed) -> list:
    """Known grades first in best-to-worst order, then any other observed labels sorted."""
    observed = set(observed)
    known = [level for level in GRADE_LEVELS if level in observed]
    return known + sorted(observed - set(known))
