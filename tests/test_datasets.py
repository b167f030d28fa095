from backend.core.ingestion.csv_parser import parse_csv, ParseOptions
from backend.core.datasets import (
    DEFAULT_DATASETS,
    get_dataset,
    parse_ac_vote_share,
    find_ac_vote_share,
    parse_zone_contacts
)

AC_CSV = "\n".join([
    "Local Body Target,,,,,,,,",
    "AC level,,,,,,,,",
    "Zone,Org District,AC,2020 LSG VS,2020 LSG Votes,2024 GE VS,2024 GE Votes,2025 LSG VS,2025 LSG Votes",
    'Thiruvananthapuram,"Tvm North",Vattiyoorkavu,21.4%,"32,104",30.1%,40211,35%,45000',
    "Thiruvananthapuram,Tvm North,Kazhakkoottam,18,20000,27.55,,33,",
    ",Tvm South,Kovalam,10,1,10,1,10,1",
    "Ernakulam,Kochi,Tripunithura,12.3,100",
])

CONTACTS_CSV = "\n".join([
    "Zone contacts",
    "",
    "",
    "",
    "",
    "No,Blank,Blank,Blank,Zone,Incharge,Incharge Phone,President,President Phone",
    "1,,,,Alappuzha,Adv P Sudheer,9847303220,Shri.N Hari,919446924053",
    "2,,,,Palakkad,,9895236524,Shri.K.Narayanan Master,9447004994",
    "3,,,,Kozhikode,Adv B Gopalakrishnan,94470 32898,Adv.Sreekanth,n/a",
])


def load(text, source):
    definition = DEFAULT_DATASETS[source]
    return parse_csv(text, ParseOptions(skip_header_lines=definition.skip_header_lines))


# ---------------------------------------------------------------------------
# AC vote share
# ---------------------------------------------------------------------------

def test_ac_vote_share_nests_zone_and_district():
    data = parse_ac_vote_share(load(AC_CSV, "ac-vote-share"))

    assert list(data) == ["Thiruvananthapuram", "Ernakulam"]
    acs = data["Thiruvananthapuram"]["Tvm North"]
    assert [ac["name"] for ac in acs] == ["Vattiyoorkavu", "Kazhakkoottam"]
    assert acs[0]["lsg2020"] == {"vs": "21.40%", "votes": "32,104"}
    assert acs[0]["target2025"] == {"vs": "35.00%", "votes": "45000"}
    assert acs[1]["ge2024"] == {"vs": "27.55%", "votes": "0"}


def test_ac_vote_share_skips_rows_without_zone():
    data = parse_ac_vote_share(load(AC_CSV, "ac-vote-share"))

    assert "Tvm South" not in [district for districts in data.values() for district in districts]


def test_ac_vote_share_keeps_padded_short_rows():
    data = parse_ac_vote_share(load(AC_CSV, "ac-vote-share"))

    entry = data["Ernakulam"]["Kochi"][0]
    assert entry["lsg2020"] == {"vs": "12.30%", "votes": "100"}
    assert entry["ge2024"] == {"vs": "0%", "votes": "0"}


def test_find_ac_vote_share_matches_name_variants():
    data = parse_ac_vote_share(load(AC_CSV, "ac-vote-share"))

    assert len(find_ac_vote_share(data, "tvm  north", "THIRUVANANTHAPURAM")) == 2
    assert find_ac_vote_share(data, "Unknown", "Ernakulam") == []


# ---------------------------------------------------------------------------
# Zone contacts
# ---------------------------------------------------------------------------

def test_zone_contacts_keep_complete_rows_only():
    contacts = parse_zone_contacts(load(CONTACTS_CSV, "zone-contacts"))

    assert contacts == [{
        "name": "Alappuzha",
        "incharge_name": "Adv P Sudheer",
        "incharge_phone": "+91 9847303220",
        "president_name": "Shri.N Hari",
        "president_phone": "+919446924053"
    }]


def test_zone_contacts_data_starts_on_line_seven():
    text = "\n".join([
        "BJP Kerala",
        "Zone contacts",
        "Updated weekly",
        "Contact the zone office for changes",
        "Sheet 3",
        "No,Blank,Blank,Blank,Zone,Incharge,Incharge Phone,President,President Phone",
        "1,,,,Thrissur,Adv K K Anish Kumar,9447012345,Shri.A Nagesh,9846012345",
    ])

    parse_result = load(text, "zone-contacts")
    contacts = parse_zone_contacts(parse_result)

    assert parse_result.headers[4] == "Zone"
    assert [contact["name"] for contact in contacts] == ["Thrissur"]
    assert get_dataset("zone-contacts").skip_header_lines + 1 == 6


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def test_registry_lookup():
    assert get_dataset("ac-vote-share").skip_header_lines == 2
    assert get_dataset("zone-contacts").empty_factory() == []
    assert get_dataset("missing") is None
    assert get_dataset("x", {}) is None
