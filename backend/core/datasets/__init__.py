# core/datasets/__init__.py
"""
Dataset row parsers built on the ingestion loader.
"""

from .registry import DatasetDefinition, DEFAULT_DATASETS, get_dataset
from .ac_vote_share import parse_ac_vote_share, find_ac_vote_share
from .zone_contacts import parse_zone_contacts

__all__ = [
    'DatasetDefinition',
    'DEFAULT_DATASETS',
    'get_dataset',
    'parse_ac_vote_share',
    'find_ac_vote_share',
    'parse_zone_contacts'
]
