"""
Life-stage prompt templates.
"""

from enum import Enum
from typing import Dict


class LifeStage(str, Enum):
    YOUNG = "young"
    OLDER = "older"
    RETIREMENT = "retirement"

    @property
    def descriptor(self) -> str:
        return _DESCRIPTORS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_DESCRIPTORS = {
    LifeStage.YOUNG: "young worker (20s-30s)",
    LifeStage.OLDER: "older worker (40s-60s, nearing retirement)",
    LifeStage.RETIREMENT: "retiree (60s+)",
}

# Shown in the selector
_LABELS = {
    LifeStage.YOUNG: "Young Worker (20s–30s)",
    LifeStage.OLDER: "Older Worker (40s–60s)",
    LifeStage.RETIREMENT: "Retirement (60s+)",
}

STRATEGY_PROMPT_TEMPLATE = (
    "Provide clear, practical investment strategies for a {descriptor}. \n"
    "Include key actions, recommended account types, asset allocation ideas, "
    "and end with a disclaimer that this is general educational information only."
)


def build_prompt(life_stage: LifeStage) -> str:
    """Fill the strategy template for a life stage.

    Accepts the enum or its raw value; anything else raises ValueError.
    """
    stage = LifeStage(life_stage)
    return STRATEGY_PROMPT_TEMPLATE.format(descriptor=stage.descriptor)


def build_payload(life_stage: LifeStage) -> Dict[str, str]:
    """Request body sent to the agent runtime."""
    return {"prompt": build_prompt(life_stage)}
