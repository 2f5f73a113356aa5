"""Tests for GEDCOM and JSON data set loading."""

import json

import pytest

from indexes import PersonIndex
from labels import last_year
from models import Sex
from parsing import (
    coerce_id,
    extract_person_id,
    load_dataset_json,
    load_gedcom,
    parse_generations,
    sex_from_raw,
)

GEDCOM = """0 HEAD
1 SOUR test
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME Anna /Puig/
1 SEX F
1 BIRT
2 DATE 12 MAR 1980
2 PLAC Girona
0 @I2@ INDI
1 NAME Joan /Puig/
1 SEX M
1 OCCU Pagès
1 DEAT
2 DATE 2010
0 @I3@ INDI
1 NAME Maria /Serra/
1 SEX F
1 RESN privacy
0 @F1@ FAM
1 HUSB @I2@
1 WIFE @I3@
1 CHIL @I1@
0 TRLR
"""

SHARED_DIGITS_GEDCOM = """0 HEAD
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME Anna /Puig/
1 SEX F
0 @I12@ INDI
1 NAME Joan /Puig/
1 SEX M
0 @I1_2@ INDI
1 NAME Maria /Serra/
1 SEX F
0 @F1@ FAM
1 HUSB @I12@
1 WIFE @I1_2@
1 CHIL @I1@
0 TRLR
"""

DUPLICATE_ID_GEDCOM = """0 HEAD
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I12@ INDI
1 NAME Joan /Puig/
0 @P12@ INDI
1 NAME Pere /Roca/
0 TRLR
"""


class TestValues:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (0, Sex.MALE),
            (1, Sex.FEMALE),
            (2, Sex.UNKNOWN),
            (7, Sex.UNKNOWN),
            ("M", Sex.MALE),
            ("f", Sex.FEMALE),
            ("1", Sex.FEMALE),
            ("home", Sex.MALE),
            ("dona", Sex.FEMALE),
            ("U", Sex.UNKNOWN),
            (None, Sex.UNKNOWN),
            (True, Sex.UNKNOWN),
        ],
    )
    def test_sex_from_raw(self, raw, expected):
        assert sex_from_raw(raw) is expected

    def test_coerce_id(self):
        assert coerce_id(12) == 12
        assert coerce_id("12") == 12
        assert coerce_id(" I12a ") == "I12a"
        assert coerce_id(0) is None
        assert coerce_id("") is None
        assert coerce_id(None) is None

    def test_extract_person_id(self):
        assert extract_person_id("@I_347421849@") == 347421849
        assert extract_person_id("@I12@") == 12
        assert extract_person_id("@12@") == 12
        assert extract_person_id("@SMITH@") == "SMITH"
        assert extract_person_id("@I1_2@") == "I1_2"
        assert extract_person_id("@SMITH_J@") == "SMITH_J"
        with pytest.raises(ValueError):
            extract_person_id("@@")

    @pytest.mark.parametrize(
        "value,expected",
        [("4", 4), ("", 3), (None, 3), ("abc", 3), ("0", 3), ("-2", 3), ("12", 7), (" 5 ", 5)],
    )
    def test_parse_generations(self, value, expected):
        assert parse_generations(value) == expected

    def test_parse_generations_bounds(self):
        assert parse_generations("6", default=4, maximum=8) == 6
        assert parse_generations("x", default=10, maximum=8) == 8


class TestDataset:
    def test_load_json(self, tmp_path):
        path = tmp_path / "tree.json"
        path.write_text(
            json.dumps(
                {
                    "familyData": [
                        {"id": 1, "name": "Anna", "sex": 1, "birth": "1980", "birth_place": "Vic"},
                        {"id": 2, "name": "Joan", "sex": 0},
                        {"id": "imp-3", "name": "Maria", "hidden": True},
                    ],
                    "familyLinks": [{"child": 1, "father": 2, "mother": "imp-3"}, {"child": 2}],
                    "rootPersonId": 1,
                }
            ),
            encoding="utf-8",
        )
        persons, links, root_id = load_dataset_json(path)

        assert root_id == 1
        assert [p.id for p in persons] == [1, 2, "imp-3"]
        assert persons[0].sex is Sex.FEMALE
        assert persons[0].birth_place == "Vic"
        assert persons[2].hidden
        assert persons[2].sex is Sex.UNKNOWN
        assert links[0].mother == "imp-3"
        assert links[1].father is None and links[1].mother is None


class TestGedcom:
    def test_load_gedcom(self, tmp_path):
        path = tmp_path / "tree.ged"
        path.write_text(GEDCOM, encoding="utf-8")
        persons, links = load_gedcom(path)

        by_id = {p.id: p for p in persons}
        assert set(by_id) == {1, 2, 3}
        assert by_id[1].name == "Anna Puig"
        assert by_id[1].sex is Sex.FEMALE
        assert last_year(by_id[1].birth) == "1980"
        assert by_id[1].birth_place == "Girona"
        assert by_id[2].occupation == "Pagès"
        assert last_year(by_id[2].death) == "2010"
        assert by_id[3].hidden
        assert not by_id[1].hidden

        assert len(links) == 1
        assert (links[0].child, links[0].father, links[0].mother) == (1, 2, 3)

    def test_xrefs_sharing_digits_stay_distinct(self, tmp_path):
        path = tmp_path / "shared.ged"
        path.write_text(SHARED_DIGITS_GEDCOM, encoding="utf-8")
        persons, links = load_gedcom(path)

        index = PersonIndex(persons)
        assert len(index) == 3
        assert index.get(12).name == "Joan Puig"
        assert index.get("I1_2").name == "Maria Serra"
        assert (links[0].child, links[0].father, links[0].mother) == (1, 12, "I1_2")

    def test_duplicate_ids_rejected(self, tmp_path):
        path = tmp_path / "duplicate.ged"
        path.write_text(DUPLICATE_ID_GEDCOM, encoding="utf-8")
        with pytest.raises(ValueError, match="share ID 12"):
            load_gedcom(path)

    @pytest.mark.parametrize("restriction,hidden", [("confidential", True), ("locked", False)])
    def test_restriction_values(self, tmp_path, restriction, hidden):
        path = tmp_path / "resn.ged"
        path.write_text(
            DUPLICATE_ID_GEDCOM.replace("0 @P12@ INDI\n1 NAME Pere /Roca/\n", "").replace(
                "1 NAME Joan /Puig/\n", f"1 NAME Joan /Puig/\n1 RESN {restriction}\n"
            ),
            encoding="utf-8",
        )
        persons, _ = load_gedcom(path)
        assert persons[0].hidden is hidden
