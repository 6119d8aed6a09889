"""Tests for IDFDocument editing, queries and the change log."""

from __future__ import annotations

import logging
import re
import warnings
from pathlib import Path

import pytest

import epmodel
from epmodel import IDFDocument, load_idf, new_document
from epmodel.exceptions import (
    DuplicateNameError,
    DuplicateUniqueObjectError,
    FieldValueError,
    InvalidFieldError,
    MissingRequiredFieldError,
    MissingVersionError,
    ReferencedObjectError,
    UnknownClassError,
    UnknownIdError,
    UnsupportedVersionError,
)
from epmodel.objects import ObjectState
from epmodel.schema import IDDSchema, parse_idd
from epmodel.store import ObjectStore
from epmodel.validation import ViolationKind

# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_load_idf(self, idf_file: Path) -> None:
        doc = load_idf(idf_file)
        assert doc.version == "8.8"
        assert doc.filepath == idf_file
        assert len(doc) == 10
        assert doc.kind == "IDF"

    def test_from_text_shares_schema(self, idf_text: str, schema: IDDSchema) -> None:
        first = IDFDocument.from_text(idf_text)
        second = IDFDocument.from_text(idf_text)
        assert first.schema is second.schema is schema

    def test_explicit_schema(self, idf_text: str, schema: IDDSchema) -> None:
        assert IDFDocument.from_text(idf_text, schema).schema is schema

    def test_explicit_idd_path(self, idf_text: str) -> None:
        idd_path = Path(epmodel.__file__).parent / "idd" / "V8-8-0" / "Energy+.idd"
        doc = IDFDocument.from_text(idf_text, idd_path)
        assert doc.schema.version == "8.8.0"

    def test_missing_version(self) -> None:
        with pytest.raises(MissingVersionError):
            IDFDocument.from_text("Zone,A;\n")

    def test_unsupported_version(self) -> None:
        with pytest.raises(UnsupportedVersionError):
            IDFDocument.from_text("Version,3.1;\n")

    def test_version_mismatch_warns(self, schema: IDDSchema) -> None:
        with pytest.warns(UserWarning, match="does not match dictionary version"):
            IDFDocument.from_text("Version,9.2;\n", schema)

    def test_non_numeric_version(self) -> None:
        with pytest.raises(UnsupportedVersionError, match="abc"):
            IDFDocument.from_text("Version,abc;\n")

    def test_non_numeric_version_with_schema(self, schema: IDDSchema) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            doc = IDFDocument.from_text("Version,abc;\nZone,Z1;\n", schema)
        assert doc.version == "abc"
        assert doc.get("Zone")[0].name == "Z1"

    def test_new_document(self) -> None:
        doc = new_document()
        assert doc.all("class") == ["Version"]
        assert doc.version == "8.8"
        assert doc.filepath is None
        assert not doc.is_dirty

    def test_new_document_from_tuple(self) -> None:
        assert new_document((8, 8, 0)).version == "8.8"

    def test_load_logs(self, idf_file: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="epmodel"):
            load_idf(idf_file)
        assert "Loaded" in caplog.text


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_get_by_id(self, doc: IDFDocument) -> None:
        assert doc.get(4)[0].name == "TestZone"

    def test_get_mixed_keys_in_order(self, doc: IDFDocument) -> None:
        objects = doc.get("zone", 5)
        assert [o.class_name for o in objects] == ["Zone", "Material"]

    def test_get_unknown_id(self, doc: IDFDocument) -> None:
        with pytest.raises(UnknownIdError):
            doc.get(99)

    def test_get_class_not_in_schema(self, doc: IDFDocument) -> None:
        with pytest.raises(UnknownClassError):
            doc.get("Gizmo")

    def test_get_class_without_objects(self, doc: IDFDocument) -> None:
        with pytest.raises(UnknownClassError):
            doc.get("Lights")

    def test_all_ids(self, doc: IDFDocument) -> None:
        assert doc.all() == list(range(1, 11))
        assert doc.all("id", "zone") == [4]

    def test_all_classes_in_schema_order(self, empty_doc: IDFDocument) -> None:
        empty_doc.add("Zone", "Z1")
        empty_doc.add("ScheduleTypeLimits", "Fraction")
        assert empty_doc.all("class") == ["Version", "ScheduleTypeLimits", "Zone"]

    def test_all_fields_marks_required(self, doc: IDFDocument) -> None:
        fields = doc.all("field", "Construction")
        assert fields[:3] == ["Name*", "Outside Layer*", "Layer 2"]

    def test_all_fields_needs_class(self, doc: IDFDocument) -> None:
        with pytest.raises(ValueError, match="requires a class name"):
            doc.all("field")

    def test_all_invalid_type(self, doc: IDFDocument) -> None:
        with pytest.raises(ValueError, match="Invalid type"):
            doc.all("name")

    def test_contains_class(self, doc: IDFDocument) -> None:
        assert doc.contains("material") == [5]
        assert doc.contains("Schedule") == [8, 9]

    def test_contains_field(self, doc: IDFDocument) -> None:
        assert doc.contains("alwayson", "field") == [9, 10]

    def test_contains_escapes_text(self, doc: IDFDocument) -> None:
        assert doc.contains("Building.", "class") == []

    def test_matches(self, doc: IDFDocument) -> None:
        assert doc.matches(r"^Material$") == [5]
        assert doc.matches(r"^Test(Zone|Wall)$", "field") == [4, 7, 10]

    def test_matches_case_sensitive(self, doc: IDFDocument) -> None:
        assert doc.matches("testzone", "field", flags=0) == []

    def test_invalid_scope(self, doc: IDFDocument) -> None:
        with pytest.raises(ValueError, match="Invalid scope"):
            doc.contains("Zone", "name")

    def test_referents_of(self, doc: IDFDocument) -> None:
        assert doc.referents_of(4) == [(7, 3), (10, 1)]

    def test_referents_of_unreferenced(self, doc: IDFDocument) -> None:
        assert doc.referents_of(10) == []

    def test_referents_of_unnamed(self, empty_doc: IDFDocument) -> None:
        output_id = empty_doc.add("Output:Variable", "*", "Zone Mean Air Temperature")
        assert empty_doc.referents_of(output_id) == []

    def test_describe(self, doc: IDFDocument) -> None:
        assert doc.describe("material").class_name == "Material"

    def test_len_iter_contains(self, doc: IDFDocument) -> None:
        assert len(doc) == 10
        assert [o.id for o in doc] == doc.all()
        assert 4 in doc
        assert 99 not in doc

    def test_str_summary(self, doc: IDFDocument) -> None:
        text = str(doc)
        assert "[ Version ]: 8.8" in text
        assert "[ Objects ]: 10 active, 0 hidden, 0 deleted" in text
        assert "  Zone: 1" in text

    def test_repr(self, doc: IDFDocument) -> None:
        assert repr(doc) == "IDFDocument(version=8.8, objects=10)"


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


class TestAdd:
    def test_minimal_material(self, empty_doc: IDFDocument, material_fields: dict[str, object]) -> None:
        mat_id = empty_doc.add("Material", data=material_fields, minimal=True)
        material = empty_doc.get(mat_id)[0]
        assert material.values == ["M1", "Rough", "0.1", "0.5", "1000", "900"]

    def test_missing_name(self, empty_doc: IDFDocument, material_fields: dict[str, object]) -> None:
        del material_fields["name"]
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            empty_doc.add("Material", data=material_fields)
        assert exc_info.value.fields == ["Name"]
        assert empty_doc.all("id", "Material") == []

    def test_keyword_fields(self, empty_doc: IDFDocument, material_fields: dict[str, object]) -> None:
        mat_id = empty_doc.add("Material", **material_fields)
        assert empty_doc.get(mat_id)[0]["Specific Heat"] == "900"

    def test_positional_values(self, empty_doc: IDFDocument) -> None:
        mat_id = empty_doc.add("material", "Concrete", "MediumRough", 0.2, 1.4, 2240, 900)
        material = empty_doc.get(mat_id)[0]
        assert material.class_name == "Material"
        assert material.value("density") == 2240.0

    def test_full_object_gets_defaults(self, empty_doc: IDFDocument, material_fields: dict[str, object]) -> None:
        mat_id = empty_doc.add("Material", data=material_fields, minimal=False)
        material = empty_doc.get(mat_id)[0]
        assert len(material) == 9
        assert material.values[6:] == [".9", ".7", ".7"]

    def test_defaults_fill_minimum_fields(self, empty_doc: IDFDocument) -> None:
        building_id = empty_doc.add("Building")
        building = empty_doc.get(building_id)[0]
        assert building.values == ["NONE", "0.0", "Suburbs", ".04", ".4", "FullExterior", "25", "6"]

    def test_supplied_past_minimum(self, empty_doc: IDFDocument) -> None:
        zone_id = empty_doc.add("Zone", "Z1", multiplier=3)
        assert empty_doc.get(zone_id)[0].values == ["Z1", "0", "0", "0", "0", "1", "3"]

    def test_class_without_fields_needs_one_value(self, empty_doc: IDFDocument) -> None:
        zone_id = empty_doc.add("Zone", "Z1")
        assert len(empty_doc.get(zone_id)[0]) == 1

    def test_unknown_class(self, empty_doc: IDFDocument) -> None:
        with pytest.raises(UnknownClassError):
            empty_doc.add("Gizmo", "G1")

    def test_unknown_field(self, empty_doc: IDFDocument) -> None:
        with pytest.raises(InvalidFieldError):
            empty_doc.add("Zone", "Z1", colour="red")

    def test_invalid_values_rejected(self, empty_doc: IDFDocument, material_fields: dict[str, object]) -> None:
        material_fields.update(roughness="Bumpy", thickness=-1)
        with pytest.raises(FieldValueError) as exc_info:
            empty_doc.add("Material", data=material_fields)
        kinds = [v.kind for v in exc_info.value.violations]
        assert kinds == [ViolationKind.INVALID_CHOICE, ViolationKind.OUT_OF_RANGE]
        assert exc_info.value.violations[0].field_name == "Roughness"
        assert len(empty_doc.log) == 1

    def test_dangling_reference_rejected(self, empty_doc: IDFDocument) -> None:
        with pytest.raises(FieldValueError) as exc_info:
            empty_doc.add("Construction", "C1", outside_layer="Missing")
        assert exc_info.value.violations[0].kind == ViolationKind.DANGLING_REFERENCE

    def test_duplicate_name(self, doc: IDFDocument) -> None:
        with pytest.raises(DuplicateNameError):
            doc.add("Zone", "testzone")

    def test_same_name_other_class(self, doc: IDFDocument) -> None:
        doc.add("Lights", "TestZone", "TestZone", "AlwaysOn", data={"Lighting Level": 100})
        assert len(doc.all("id", "Lights")) == 1

    def test_separator_in_value(self, empty_doc: IDFDocument) -> None:
        with pytest.raises(ValueError, match="may not contain"):
            empty_doc.add("Zone", "Z1;Z2")

    def test_logged(self, empty_doc: IDFDocument) -> None:
        zone_id = empty_doc.add("Zone", "Z1")
        entry = empty_doc.log[-1]
        assert (entry.action, entry.object_id, entry.new_object_id) == ("add", zone_id, zone_id)
        assert empty_doc.is_dirty

    def test_references_registered(self, simple_doc: IDFDocument) -> None:
        zone_id = simple_doc.all("id", "Zone")[0]
        wall_id = simple_doc.all("id", "BuildingSurface:Detailed")[0]
        assert simple_doc.referents_of(zone_id) == [(wall_id, 3)]


class TestUniqueGuard:
    @pytest.mark.parametrize("class_name", ["Version", "Building", "GlobalGeometryRules"])
    def test_add_rejected_when_present(self, doc: IDFDocument, class_name: str) -> None:
        with pytest.raises(DuplicateUniqueObjectError) as exc_info:
            doc.add(class_name)
        assert exc_info.value.existing_id == doc.all("id", class_name)[0]

    def test_add_allowed_when_absent(self, empty_doc: IDFDocument) -> None:
        timestep_id = empty_doc.add("Timestep")
        assert empty_doc.get(timestep_id)[0].values == ["6"]
        with pytest.raises(DuplicateUniqueObjectError):
            empty_doc.add("Timestep", 4)

    def test_add_allowed_after_delete(self, empty_doc: IDFDocument) -> None:
        timestep_id = empty_doc.add("Timestep", 4)
        empty_doc.delete(timestep_id)
        assert empty_doc.add("Timestep", 10) > timestep_id

    def test_hidden_object_still_unique(self, doc: IDFDocument) -> None:
        doc.hide(2)
        with pytest.raises(DuplicateUniqueObjectError) as exc_info:
            doc.add("Building")
        assert exc_info.value.existing_id == 2

    def test_dup_rejected(self, doc: IDFDocument) -> None:
        with pytest.raises(DuplicateUniqueObjectError):
            doc.dup(doc.all("id", "Building")[0])


# ---------------------------------------------------------------------------
# Monotonic ids
# ---------------------------------------------------------------------------


class TestIds:
    def test_ids_strictly_increase(self, doc: IDFDocument) -> None:
        issued = doc.all()
        for i in range(5):
            new_id = doc.add("Zone", f"Z{i}") if i % 2 == 0 else doc.dup(4)
            assert new_id > max(issued)
            issued.append(new_id)

    def test_deleted_ids_not_reissued(self, empty_doc: IDFDocument) -> None:
        zone_id = empty_doc.add("Zone", "Z1")
        empty_doc.delete(zone_id)
        assert empty_doc.add("Zone", "Z1") == zone_id + 1

    def test_failed_add_consumes_no_id(self, empty_doc: IDFDocument) -> None:
        first = empty_doc.add("Zone", "Z1")
        with pytest.raises(DuplicateNameError):
            empty_doc.add("Zone", "Z1")
        assert empty_doc.add("Zone", "Z2") == first + 1


# ---------------------------------------------------------------------------
# set
# ---------------------------------------------------------------------------


class TestSet:
    def test_set_field(self, doc: IDFDocument) -> None:
        material = doc.set(5, thickness=0.2)
        assert material["Thickness"] == "0.2"
        assert material.state == ObjectState.MODIFIED

    def test_set_by_index_and_name(self, doc: IDFDocument) -> None:
        doc.set(5, data={2: 0.3, "Specific Heat {J/kg-K}": 1200})
        material = doc.get(5)[0]
        assert material.values[2] == "0.3"
        assert material.values[5] == "1200"

    def test_set_positional(self, doc: IDFDocument) -> None:
        doc.set(9, "AlwaysOn", "Fraction", 0.5)
        assert doc.get(9)[0].value("Hourly Value") == 0.5

    def test_set_extends_values(self, doc: IDFDocument) -> None:
        doc.set(5, thermal_absorptance=0.85)
        material = doc.get(5)[0]
        assert len(material) == 7
        assert material.values[6] == "0.85"

    def test_set_nothing(self, doc: IDFDocument) -> None:
        before = len(doc.log)
        doc.set(5)
        assert len(doc.log) == before

    def test_clear_optional_field(self, doc: IDFDocument) -> None:
        doc.set(4, multiplier=None)
        assert doc.get(4)[0]["Multiplier"] == ""

    def test_clear_required_with_default(self, doc: IDFDocument) -> None:
        doc.set(1, version_identifier="")
        assert doc.get(1)[0].values == ["8.8"]

    def test_clear_required_without_default(self, doc: IDFDocument) -> None:
        with pytest.raises(MissingRequiredFieldError):
            doc.set(5, conductivity="")
        assert doc.get(5)[0]["Conductivity"] == "1.0"

    def test_invalid_value_leaves_object_unchanged(self, doc: IDFDocument) -> None:
        with pytest.raises(FieldValueError):
            doc.set(5, thickness=0.2, density=-5)
        material = doc.get(5)[0]
        assert material["Thickness"] == "0.1"
        assert material.state == ObjectState.ACTIVE

    def test_reference_must_exist(self, doc: IDFDocument) -> None:
        with pytest.raises(FieldValueError):
            doc.set(6, outside_layer="Missing")

    def test_reference_update_tracked(self, doc: IDFDocument) -> None:
        other_id = doc.add("Material:NoMass", "Insulation", "Rough", 2.5)
        doc.set(6, outside_layer="Insulation")
        assert doc.referents_of(other_id) == [(6, 1)]
        assert doc.referents_of(5) == []

    def test_unknown_id(self, doc: IDFDocument) -> None:
        with pytest.raises(UnknownIdError):
            doc.set(99, name="X")

    def test_deleted_object(self, doc: IDFDocument) -> None:
        doc.delete(10)
        with pytest.raises(UnknownIdError):
            doc.set(10, number_of_people=5)

    def test_logged(self, doc: IDFDocument) -> None:
        doc.set(5, thickness=0.2)
        assert doc.log[-1].action == "set"
        assert doc.log[-1].object_id == 5


class TestRenamePropagation:
    def test_rename_updates_referents(self, doc: IDFDocument) -> None:
        doc.set(4, name="Core")
        assert doc.get(7)[0]["Zone Name"] == "Core"
        assert doc.get(10)[0]["Zone or ZoneList Name"] == "Core"
        assert doc.get(7)[0].state == ObjectState.MODIFIED
        assert doc.check().by_kind(ViolationKind.DANGLING_REFERENCE) == []

    def test_rename_moves_reference_edges(self, doc: IDFDocument) -> None:
        doc.set(4, name="Core")
        assert doc.referents_of(4) == [(7, 3), (10, 1)]

    def test_rename_schedule_updates_every_field(self, doc: IDFDocument) -> None:
        doc.set(9, name="Occupancy")
        people = doc.get(10)[0]
        assert people["Number of People Schedule Name"] == "Occupancy"
        assert people["Activity Level Schedule Name"] == "Occupancy"

    def test_rename_chain(self, doc: IDFDocument) -> None:
        doc.set(5, name="Brick")
        doc.set(6, name="Wall Construction")
        assert doc.get(6)[0]["Outside Layer"] == "Brick"
        assert doc.get(7)[0]["Construction Name"] == "Wall Construction"
        assert doc.check().is_valid

    def test_rename_logs_referents(self, doc: IDFDocument) -> None:
        start = doc.log.last_step
        doc.set(4, name="Core")
        entries = [e for e in doc.log if e.step > start]
        assert [(e.action, e.object_id) for e in entries] == [("set", 4), ("set", 7), ("set", 10)]

    def test_rename_to_taken_name(self, doc: IDFDocument) -> None:
        doc.add("Zone", "Other")
        with pytest.raises(DuplicateNameError):
            doc.set(4, name="other")
        assert doc.get(7)[0]["Zone Name"] == "TestZone"

    def test_case_only_rename(self, doc: IDFDocument) -> None:
        doc.set(4, name="TESTZONE")
        assert doc.get(7)[0]["Zone Name"] == "TESTZONE"
        assert doc.referents_of(4) == [(7, 3), (10, 1)]

    def test_rename_updates_hidden_referent(self, doc: IDFDocument) -> None:
        doc.hide(10)
        doc.set(4, name="Core")
        assert doc.store[10]["Zone or ZoneList Name"] == "Core"
        assert doc.store[10].state == ObjectState.HIDDEN

    def test_same_name_other_class_untouched(self, doc: IDFDocument) -> None:
        doc.add("Material:NoMass", "TestZone", "Rough", 1.0)
        doc.set(6, outside_layer="TestZone")
        doc.set(4, name="Core")
        assert doc.get(6)[0]["Outside Layer"] == "TestZone"
        assert doc.get(7)[0]["Zone Name"] == "Core"


# ---------------------------------------------------------------------------
# dup, delete, hide
# ---------------------------------------------------------------------------


class TestDup:
    def test_dup_suffix(self, doc: IDFDocument) -> None:
        first = doc.dup(4)
        second = doc.dup(4)
        assert doc.get(first)[0].name == "TestZone_1"
        assert doc.get(second)[0].name == "TestZone_2"

    def test_dup_copies_values(self, doc: IDFDocument) -> None:
        new_id = doc.dup(5)
        assert doc.get(new_id)[0].values[1:] == doc.get(5)[0].values[1:]

    def test_dup_with_name(self, doc: IDFDocument) -> None:
        new_id = doc.dup(4, "East")
        assert doc.get(new_id)[0].name == "East"

    def test_dup_name_taken(self, doc: IDFDocument) -> None:
        with pytest.raises(DuplicateNameError):
            doc.dup(4, "TestZone")

    def test_dup_registers_references(self, doc: IDFDocument) -> None:
        new_id = doc.dup(10)
        assert (new_id, 1) in doc.referents_of(4)

    def test_dup_unnamed_class(self, empty_doc: IDFDocument) -> None:
        output_id = empty_doc.add("Output:Variable", "*", "Zone Mean Air Temperature")
        copy_id = empty_doc.dup(output_id)
        assert empty_doc.get(copy_id)[0].values == empty_doc.get(output_id)[0].values

    def test_dup_logged(self, doc: IDFDocument) -> None:
        new_id = doc.dup(4)
        entry = doc.log[-1]
        assert (entry.action, entry.object_id, entry.new_object_id) == ("dup", 4, new_id)


class TestDeleteGuard:
    def test_referenced_rejected(self, doc: IDFDocument) -> None:
        with pytest.raises(ReferencedObjectError) as exc_info:
            doc.delete(4)
        assert [r[0] for r in exc_info.value.referents] == [7, 10]
        assert 4 in doc.all()

    def test_unreferenced_allowed(self, doc: IDFDocument) -> None:
        assert doc.referents_of(10) == []
        doc.delete(10)
        assert 10 not in doc.all()
        assert doc.store[10].state == ObjectState.DELETED

    def test_force(self, doc: IDFDocument, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="epmodel"):
            doc.delete(4, force=True)
        assert 4 not in doc.all()
        assert "still referenced" in caplog.text
        dangling = doc.check().by_kind(ViolationKind.DANGLING_REFERENCE)
        assert sorted(v.object_id for v in dangling) == [7, 10]

    def test_guard_follows_referents(self, doc: IDFDocument) -> None:
        doc.delete(10)
        doc.delete(7)
        doc.delete(4)
        assert doc.all("id", "Zone") == []

    def test_deleted_referent_releases_target(self, doc: IDFDocument) -> None:
        doc.delete(7)
        assert doc.referents_of(6) == []
        doc.delete(6)

    def test_delete_twice(self, doc: IDFDocument) -> None:
        doc.delete(10)
        with pytest.raises(UnknownIdError):
            doc.delete(10)

    def test_logged_inactive(self, doc: IDFDocument) -> None:
        doc.delete(10)
        entry = doc.log[-1]
        assert (entry.action, entry.object_id, entry.active) == ("del", 10, False)


class TestHide:
    def test_hidden_invisible_to_queries(self, doc: IDFDocument) -> None:
        doc.hide(10)
        assert 10 not in doc.all()
        with pytest.raises(UnknownIdError):
            doc.get(10)
        assert doc.store[10].state == ObjectState.HIDDEN

    def test_hidden_still_references(self, doc: IDFDocument) -> None:
        doc.hide(10)
        assert doc.referents_of(4) == [(7, 3), (10, 1)]

    def test_hidden_written_not_simulated(self, doc: IDFDocument) -> None:
        doc.hide(10)
        assert "TestPeople" in doc.to_idf()
        assert "TestPeople" not in doc.serialize_for_simulation()

    def test_logged(self, doc: IDFDocument) -> None:
        doc.hide(10)
        assert doc.log[-1].action == "hide"
        assert doc.diff()[-1].action == "hide"

    def test_hidden_name_still_taken(self, doc: IDFDocument) -> None:
        doc.hide(4)
        with pytest.raises(DuplicateNameError):
            doc.add("Zone", "testzone")

    def test_rename_to_hidden_name(self, doc: IDFDocument) -> None:
        other_id = doc.add("Zone", "Other")
        doc.hide(other_id)
        with pytest.raises(DuplicateNameError):
            doc.set(4, name="Other")

    def test_dup_suffix_skips_hidden(self, doc: IDFDocument) -> None:
        doc.hide(doc.dup(4))
        assert doc.get(doc.dup(4))[0].name == "TestZone_2"

    def test_reference_to_hidden_object(self, doc: IDFDocument) -> None:
        doc.hide(5)
        construction_id = doc.add("Construction", "C2", "TestMaterial")
        assert doc.get(construction_id)[0]["Outside Layer"] == "TestMaterial"

    def test_deleted_name_free_again(self, doc: IDFDocument) -> None:
        doc.delete(doc.add("Zone", "Temp"))
        assert doc.get(doc.add("Zone", "Temp"))[0].name == "Temp"


class TestNameIndex:
    def test_edits_do_not_scan_store(self, doc: IDFDocument, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail(self: ObjectStore) -> list:
            raise AssertionError("full store scan")

        monkeypatch.setattr(ObjectStore, "active", fail)
        zone_id = doc.add("Zone", "East")
        doc.set(zone_id, name="West")
        doc.dup(zone_id)
        doc.add("Construction", "C2", "TestMaterial")
        assert doc.store[zone_id].name == "West"

    def test_rename_frees_old_name(self, doc: IDFDocument) -> None:
        doc.set(4, name="Core")
        new_id = doc.add("Zone", "TestZone")
        with pytest.raises(DuplicateNameError):
            doc.add("Zone", "core")
        assert doc.get(new_id)[0].name == "TestZone"


MINI_IDD = """\
!IDD_Version 8.8.0
\\group Test
Version,
  \\unique-object
  A1 ; \\field Version Identifier
Tag,
  A1 , \\field Name
       \\reference TagNames
  N1 ; \\field Weight
Label,
  A1 , \\field Name
       \\reference LabelNames
  A2 ; \\field Tag Name
       \\object-list TagNames
"""


class TestClearName:
    @pytest.fixture
    def tag_doc(self) -> IDFDocument:
        return IDFDocument.from_text("Version,8.8;\nTag,T1,1;\nLabel,L1,T1;\n", parse_idd(MINI_IDD))

    def test_referenced_name_not_cleared(self, tag_doc: IDFDocument) -> None:
        with pytest.raises(ReferencedObjectError, match="Rename it") as exc_info:
            tag_doc.set(2, name="")
        assert [r[0] for r in exc_info.value.referents] == [3]
        assert tag_doc.get(2)[0].values == ["T1", "1"]
        assert tag_doc.get(3)[0].values == ["L1", "T1"]

    def test_unreferenced_name_cleared(self, tag_doc: IDFDocument) -> None:
        tag_doc.set(3, name="")
        assert tag_doc.get(3)[0].values == ["", "T1"]


# ---------------------------------------------------------------------------
# Change log and diff
# ---------------------------------------------------------------------------


class TestChangeLog:
    def test_init_add_set_del_steps(self, empty_doc: IDFDocument) -> None:
        init = empty_doc.log[0]
        zone_id = empty_doc.add("Zone", "Z1")
        empty_doc.set(zone_id, multiplier=2)
        empty_doc.delete(zone_id)
        steps = [e.step for e in empty_doc.log]
        assert steps == [0, 1, 2, 3]
        assert [e.action for e in empty_doc.log] == ["init", "add", "set", "del"]
        assert empty_doc.log[0] is init

    def test_rejected_call_not_logged(self, doc: IDFDocument) -> None:
        with pytest.raises(ReferencedObjectError):
            doc.delete(4)
        assert len(doc.log) == 1
        assert not doc.is_dirty

    def test_diff_add(self, doc: IDFDocument) -> None:
        zone_id = doc.add("Zone", "Z1")
        copy_id = doc.dup(4)
        assert [e.new_object_id for e in doc.diff("add")] == [zone_id, copy_id]

    def test_diff_drops_deleted_objects(self, doc: IDFDocument) -> None:
        zone_id = doc.add("Zone", "Z1")
        doc.set(zone_id, multiplier=2)
        doc.delete(zone_id)
        assert doc.diff("add") == []
        assert doc.diff("set") == []
        assert [e.object_id for e in doc.diff("del")] == [zone_id]

    def test_diff_by_object(self, doc: IDFDocument) -> None:
        doc.set(5, thickness=0.2)
        doc.set(5, density=2100)
        zone_id = doc.add("Zone", "Z1")
        grouped = doc.diff_by_object()
        assert list(grouped) == [5, zone_id]
        assert len(grouped[5]) == 2

    def test_invalid_diff_type(self, doc: IDFDocument) -> None:
        with pytest.raises(ValueError, match="Invalid diff type"):
            doc.diff("modified")


class TestOutput:
    def test_to_idf_keeps_hint(self, schema: IDDSchema) -> None:
        text = "!-Option OriginalOrderTop\nVersion,8.8;\nZone,B;\n"
        doc = IDFDocument.from_text(text, schema)
        doc.add("Zone", "A")
        output = doc.to_idf()
        assert "!-Option OriginalOrderTop" in output
        assert re.search(r"Zone,\n    A;.*\n\nVersion,8\.8;\n\nZone,\n    B;", output)

    def test_to_idf_layout_override(self, doc: IDFDocument) -> None:
        assert "!-Option OriginalOrderBottom" in doc.to_idf("original_bottom")

    def test_store_copy_equality(self, doc: IDFDocument) -> None:
        before = doc.store.copy()
        doc.set(5, thickness=0.2)
        assert doc.store != before
        doc.set(5, thickness="0.1")
        assert doc.store == before
