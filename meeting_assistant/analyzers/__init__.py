"""
Analyzer package for transcript analysis.
"""

from typing import Dict, List, Optional, Sequence, Type

from meeting_assistant.analyzers.base_analyzer import BaseAnalyzer
from meeting_assistant.analyzers.ambiguity_detector import AmbiguityDetector
from meeting_assistant.analyzers.goal_drift_tracker import GoalDriftTracker
from meeting_assistant.analyzers.action_item_extractor import ActionItemExtractor
from meeting_assistant.analyzers.specificity_proposer import SpecificityProposer
from meeting_assistant.analyzers.finalization_recommender import FinalizationRecommender
from meeting_assistant.config import AppConfig, get_config

ANALYZER_CLASSES: Dict[str, Type[BaseAnalyzer]] = {
    "ambiguity_detector": AmbiguityDetector,
    "goal_drift_tracker": GoalDriftTracker,
    "action_item_extractor": ActionItemExtractor,
    "specificity_proposer": SpecificityProposer,
    "finalization_recommender": FinalizationRecommender,
}


def build_analyzers(names: Sequence[str], config: Optional[AppConfig] = None) -> List[BaseAnalyzer]:
    """Instantiate analyzers in the given order."""
    config = config or get_config()
    analyzers: List[BaseAnalyzer] = []
    for name in names:
        if name not in ANALYZER_CLASSES:
            raise ValueError(f"Unknown analyzer: {name}")
        analyzers.append(ANALYZER_CLASSES[name](config=config.processing))
    return analyzers


def default_analyzers(config: Optional[AppConfig] = None) -> List[BaseAnalyzer]:
    config = config or get_config()
    return build_analyzers(config.analyzers, config)


__all__ = [
    "BaseAnalyzer",
    "AmbiguityDetector",
    "GoalDriftTracker",
    "ActionItemExtractor",
    "SpecificityProposer",
    "FinalizationRecommender",
    "ANALYZER_CLASSES",
    "build_analyzers",
    "default_analyzers",
]
