# datasets/zone_contacts.py
"""
Zone in-charge and president contacts.
"""

import logging
from typing import Dict, List

from ..ingestion.csv_parser import ParseResult, format_phone_number, validate_required_fields

logger = logging.getLogger(__name__)

# Positional layout of the contacts sheet
COLUMNS = {
    "name": 4,
    "incharge_name": 5,
    "incharge_phone": 6,
    "president_name": 7,
    "president_phone": 8
}


def parse_zone_contacts(parse_result: ParseResult) -> List[Dict[str, str]]:
    """One contact entry per complete row."""
    contacts = []

    for row in parse_result.rows:
        record = {
            key: row[position].strip() if position < len(row) else ""
            for key, position in COLUMNS.items()
        }

        validation = validate_required_fields(record, COLUMNS.keys())
        if not validation.is_valid:
            logger.debug(f"Skipping contact row, missing {validation.missing_fields}")
            continue

        record["incharge_phone"] = format_phone_number(record["incharge_phone"])
        record["president_phone"] = format_phone_number(record["president_phone"])
        contacts.append(record)

    logger.info(f"Zone contacts loaded: {len(contacts)}")
    return contacts
