"""
Recommendation dataclass.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, Literal

RecommendationType = Literal['warning', 'suggestion', 'positive']
Priority = Literal['high', 'medium', 'low']

PRIORITY_RANK: Dict[str, int] = {'high': 3, 'medium': 2, 'low': 1}


@dataclass(frozen=True)
class SmartRecommendation:
    """One rule-based finding.

    The description embeds the figures that triggered the rule.
    """
    type: RecommendationType
    title: str
    description: str
    priority: Priority
    actionable: bool

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self.priority]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
