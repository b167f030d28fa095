# datasets/registry.py
"""
Registered CSV datasets of the dashboard.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from ..ingestion.csv_parser import ParseResult
from .ac_vote_share import parse_ac_vote_share
from .zone_contacts import parse_zone_contacts


@dataclass(frozen=True)
class DatasetDefinition:
    """Where a dataset lives and how its rows become data."""
    source: str
    path: str
    row_parser: Callable[[ParseResult], Any]
    skip_header_lines: int = 0
    cache_key: Optional[str] = None
    empty_factory: Callable[[], Any] = field(default=dict)


DEFAULT_DATASETS: Dict[str, DatasetDefinition] = {
    definition.source: definition
    for definition in [
        DatasetDefinition(
            source="ac-vote-share",
            path="/data/votesharetarget/Local Body Target - AC level - Vote Share.csv",
            row_parser=parse_ac_vote_share,
            skip_header_lines=2
        ),
        DatasetDefinition(
            source="zone-contacts",
            path="/data/contacts/map - Sheet3.csv",
            row_parser=parse_zone_contacts,
            # 5 preamble lines, header on line 6, data from line 7
            skip_header_lines=5,
            empty_factory=list
        )
    ]
}


def get_dataset(source: str, datasets: Optional[Dict[str, DatasetDefinition]] = None) -> Optional[DatasetDefinition]:
    return (datasets if datasets is not None else DEFAULT_DATASETS).get(source)
