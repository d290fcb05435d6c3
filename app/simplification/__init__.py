from app.simplification.base import BaseSimplifier
from app.simplification.factory import SimplifierFactory
from app.simplification.models import TargetLanguage
from app.simplification.simplifier import Simplifier

__all__ = ["BaseSimplifier", "Simplifier", "SimplifierFactory", "TargetLanguage"]
