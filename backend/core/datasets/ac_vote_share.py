# datasets/ac_vote_share.py
"""
AC-level vote share: zone -> org district -> assembly constituencies.
"""

import logging
from typing import Any, Dict, List

from ..ingestion.csv_parser import ParseResult, clean_field, parse_percentage, normalize_name

logger = logging.getLogger(__name__)

MIN_COLUMNS = 9

# Header row sits on line 3 of the file (two title lines above it)
FIRST_DATA_LINE = 4

ACVoteShareData = Dict[str, Dict[str, List[Dict[str, Any]]]]


def _votes(value: str) -> str:
    return value.strip() or "0"


def parse_ac_vote_share(parse_result: ParseResult) -> ACVoteShareData:
    """
    Build the nested vote-share mapping.

    Columns: Zone, Org District, AC, then vote share and votes for the 2020
    LSG, 2024 GE and 2025 LSG target. Rows without zone, org district or AC
    are skipped.
    """
    data: ACVoteShareData = {}
    skipped = []

    logger.info(f"Processing {len(parse_result.rows)} rows of AC vote share data")

    for index, row in enumerate(parse_result.rows):
        line_number = index + FIRST_DATA_LINE

        if len(row) < MIN_COLUMNS:
            skipped.append(f"Row {line_number}: Insufficient columns ({len(row)}), skipping")
            continue

        zone = clean_field(row[0])
        org_district = clean_field(row[1])
        ac = clean_field(row[2])

        if not zone or not org_district or not ac:
            skipped.append(
                f"Row {line_number}: Missing required fields (zone, orgDistrict, or AC), skipping"
            )
            continue

        data.setdefault(zone, {}).setdefault(org_district, []).append({
            "name": ac,
            "lsg2020": {"vs": parse_percentage(row[3]), "votes": _votes(row[4])},
            "ge2024": {"vs": parse_percentage(row[5]), "votes": _votes(row[6])},
            "target2025": {"vs": parse_percentage(row[7]), "votes": _votes(row[8])}
        })

    if skipped:
        logger.warning(f"AC vote share data loaded with {len(skipped)} skipped rows: {skipped}")

    logger.info(f"AC vote share zones loaded: {len(data)}")
    return data


def find_ac_vote_share(data: ACVoteShareData, org_district: str, zone: str) -> List[Dict[str, Any]]:
    """ACs of an org district, matching names case- and punctuation-insensitively."""
    zone_key = normalize_name(zone)
    org_key = normalize_name(org_district)

    for zone_name, districts in data.items():
        if normalize_name(zone_name) != zone_key:
            continue
        for district_name, acs in districts.items():
            if normalize_name(district_name) == org_key:
                return acs

    logger.debug(f"No AC data found for {org_district} in {zone}")
    return []
