from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.entitlement.models import EntitlementState
from app.simplification.models import TargetLanguage


@dataclass(slots=True)
class PipelineContext:
    text: str
    target_language_raw: str | None = None
    entitlement: EntitlementState | None = None
    target_language: TargetLanguage | None = None
    redacted_text: str = ""
    simplified_text: str = ""
    usage_token: str | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError


def run_steps(steps: list[PipelineStep], context: PipelineContext) -> PipelineContext:
    for step in steps:
        context = step.run(context)
    return context
