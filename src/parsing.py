"""Loading persons and parent links from GEDCOM files and JSON data sets."""

from pathlib import Path
import json
import re

from ged4py import GedcomReader

from models import ParentLink, Person, PersonId, Sex


MALE_VALUES = {"m", "male", "masculi", "masculí", "home"}
FEMALE_VALUES = {"f", "female", "femeni", "femení", "dona"}

# GEDCOM RESN values that keep a record off public charts
HIDDEN_RESTRICTIONS = {"confidential", "privacy"}

XREF_NUMBER = re.compile(r"[A-Za-z]*_?(\d+)")


def sex_from_raw(value) -> Sex:
    """Map a stored sex value (0/1/2 or a label such as "M" or "F") to Sex."""
    if isinstance(value, bool):
        return Sex.UNKNOWN
    if isinstance(value, int):
        return Sex(value) if value in (0, 1, 2) else Sex.UNKNOWN
    text = str(value or "").strip().lower()
    if text.isdigit():
        return sex_from_raw(int(text))
    if text in MALE_VALUES:
        return Sex.MALE
    if text in FEMALE_VALUES:
        return Sex.FEMALE
    return Sex.UNKNOWN


def coerce_id(value) -> PersonId | None:
    """Numeric ids become ints; synthetic ids such as "I12a" stay strings."""
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value or None
    text = str(value).strip()
    if not text or text == "0":
        return None
    return int(text) if text.isdigit() else text


def extract_person_id(xref_id: str) -> PersonId:
    """
    Extract the id from a GEDCOM xref.

    A letter prefix followed by digits ('@I12@', '@I_347421849@') gives the number;
    anything else ('@I1_2@', '@SMITH_J@') keeps the bare xref as a string id.
    """
    bare = xref_id.strip("@ ")
    if not bare:
        raise ValueError(f"No usable ID found in: {xref_id}")
    match = XREF_NUMBER.fullmatch(bare)
    if match:
        return int(match.group(1))
    return bare


def parse_generations(value, default: int = 3, maximum: int = 7) -> int:
    """Parse a generation count from user input, falling back to `default`."""
    if default <= 0:
        default = 3
    default = min(default, maximum)
    try:
        n = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if n <= 0:
        return default
    return min(n, maximum)


# ============================================================================
# GEDCOM
# ============================================================================


def parse_gedcom(filepath: Path) -> GedcomReader:
    """Parse a GEDCOM file and return the reader object."""
    return GedcomReader(str(filepath))


def extract_name(indi) -> str:
    """Extract the display name from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ""

    # ged4py returns NAME as tuple: (given, surname, suffix)
    name_value = name_rec.value
    if isinstance(name_value, tuple):
        return " ".join(p for p in name_value if p)

    # Fallback: string format "Given /Surname/"
    return " ".join(str(name_value).replace("/", " ").split())


def extract_event_details(indi, tag: str) -> tuple[str | None, str | None]:
    """Extract date and place from an event tag (BIRT, DEAT, etc.)."""
    event = indi.sub_tag(tag)
    if event is None:
        return (None, None)

    date_rec = event.sub_tag("DATE")
    place_rec = event.sub_tag("PLAC")

    # Convert date value to string (ged4py may return DateValue objects)
    date_val = None
    if date_rec and date_rec.value:
        date_val = str(date_rec.value)

    place_val = None
    if place_rec and place_rec.value:
        place_val = str(place_rec.value)

    return (date_val, place_val)


def extract_sex(indi) -> Sex:
    sex_rec = indi.sub_tag("SEX")
    return sex_from_raw(sex_rec.value if sex_rec else None)


def extract_hidden(indi) -> bool:
    resn = indi.sub_tag("RESN")
    if resn is None or not resn.value:
        return False
    return str(resn.value).strip().lower() in HIDDEN_RESTRICTIONS


def extract_occupation(indi) -> str | None:
    occu = indi.sub_tag("OCCU")
    return str(occu.value) if occu and occu.value else None


def normalize_data(reader: GedcomReader) -> tuple[list[Person], list[ParentLink]]:
    """
    Extract persons and child -> parents links from parsed GEDCOM data.

    A child listed in several families keeps the parents of the first one.
    """
    persons: list[Person] = []
    links: list[ParentLink] = []
    xref_for_id: dict[PersonId, str] = {}

    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue

        person_id = extract_person_id(rec.xref_id)
        if person_id in xref_for_id:
            raise ValueError(
                f"Individuals {xref_for_id[person_id]} and {rec.xref_id} share ID {person_id!r}"
            )
        xref_for_id[person_id] = rec.xref_id

        birth, birth_place = extract_event_details(rec, "BIRT")
        death, death_place = extract_event_details(rec, "DEAT")
        persons.append(
            Person(
                id=person_id,
                name=extract_name(rec),
                sex=extract_sex(rec),
                birth=birth,
                death=death,
                birth_place=birth_place,
                death_place=death_place,
                occupation=extract_occupation(rec),
                hidden=extract_hidden(rec),
            )
        )

    seen_children: set[PersonId] = set()
    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            continue

        husb = rec.sub_tag("HUSB")
        wife = rec.sub_tag("WIFE")
        husb_id = extract_person_id(husb.xref_id) if husb and husb.xref_id else None
        wife_id = extract_person_id(wife.xref_id) if wife and wife.xref_id else None
        if husb_id is None and wife_id is None:
            continue

        for child in rec.sub_tags("CHIL"):
            if not child.xref_id:
                continue
            child_id = extract_person_id(child.xref_id)
            if child_id in seen_children:
                continue
            seen_children.add(child_id)
            links.append(ParentLink(child=child_id, father=husb_id, mother=wife_id))

    return persons, links


def load_gedcom(filepath: Path) -> tuple[list[Person], list[ParentLink]]:
    return normalize_data(parse_gedcom(filepath))


# ============================================================================
# JSON data set ({"familyData": [...], "familyLinks": [...], "rootPersonId": ...})
# ============================================================================


def person_from_dict(data: dict) -> Person:
    return Person(
        id=coerce_id(data["id"]),
        name=str(data.get("name") or ""),
        sex=sex_from_raw(data.get("sex")),
        birth=data.get("birth") or None,
        death=data.get("death") or None,
        birth_place=data.get("birth_place") or None,
        death_place=data.get("death_place") or None,
        occupation=data.get("occupation") or None,
        hidden=bool(data.get("hidden", False)),
    )


def link_from_dict(data: dict) -> ParentLink:
    return ParentLink(
        child=coerce_id(data["child"]),
        father=coerce_id(data.get("father")),
        mother=coerce_id(data.get("mother")),
    )


def parse_dataset(data: dict) -> tuple[list[Person], list[ParentLink], PersonId | None]:
    persons = [person_from_dict(p) for p in data.get("familyData") or [] if p]
    links = [link_from_dict(link) for link in data.get("familyLinks") or [] if link]
    return persons, links, coerce_id(data.get("rootPersonId"))


def load_dataset_json(filepath: Path) -> tuple[list[Person], list[ParentLink], PersonId | None]:
    return parse_dataset(json.loads(Path(filepath).read_text(encoding="utf-8")))
