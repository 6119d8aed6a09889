"""Shared fixtures for epmodel tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from epmodel import IDFDocument, new_document
from epmodel.schema import IDDSchema, get_schema

SAMPLE_IDF = """\
! Sample model used across the test suite
Version,8.8;

Building,
    Test Building,           !- Name
    0,                       !- North Axis {deg}
    Suburbs,                 !- Terrain
    0.04,                    !- Loads Convergence Tolerance Value
    0.4,                     !- Temperature Convergence Tolerance Value {deltaC}
    FullExterior,            !- Solar Distribution
    25,                      !- Maximum Number of Warmup Days
    6;                       !- Minimum Number of Warmup Days

GlobalGeometryRules,
    UpperLeftCorner,         !- Starting Vertex Position
    Counterclockwise,        !- Vertex Entry Direction
    Relative;                !- Coordinate System

Zone,
    TestZone,                !- Name
    0,                       !- Direction of Relative North {deg}
    0, 0, 0,                 !- X,Y,Z Origin {m}
    1,                       !- Type
    1;                       !- Multiplier

Material,
    TestMaterial,            !- Name
    MediumSmooth,            !- Roughness
    0.1,                     !- Thickness {m}
    1.0,                     !- Conductivity {W/m-K}
    2000,                    !- Density {kg/m3}
    1000;                    !- Specific Heat {J/kg-K}

! Exterior wall construction
Construction,
    TestConstruction,        !- Name
    TestMaterial;            !- Outside Layer

BuildingSurface:Detailed,
    TestWall,                !- Name
    Wall,                    !- Surface Type
    TestConstruction,        !- Construction Name
    TestZone,                !- Zone Name
    Outdoors,                !- Outside Boundary Condition
    ,                        !- Outside Boundary Condition Object
    SunExposed,              !- Sun Exposure
    WindExposed,             !- Wind Exposure
    autocalculate,           !- View Factor to Ground
    4,                       !- Number of Vertices
    0, 0, 3,                 !- Vertex 1
    0, 0, 0,                 !- Vertex 2
    10, 0, 0,                !- Vertex 3
    10, 0, 3;                !- Vertex 4

ScheduleTypeLimits,
    Fraction,                !- Name
    0,                       !- Lower Limit Value
    1,                       !- Upper Limit Value
    Continuous;              !- Numeric Type

Schedule:Constant,
    AlwaysOn,                !- Name
    Fraction,                !- Schedule Type Limits Name
    1.0;                     !- Hourly Value

People,
    TestPeople,              !- Name
    TestZone,                !- Zone or ZoneList Name
    AlwaysOn,                !- Number of People Schedule Name
    People,                  !- Number of People Calculation Method
    10,                      !- Number of People
    ,                        !- People per Zone Floor Area
    ,                        !- Zone Floor Area per Person
    0.3,                     !- Fraction Radiant
    autocalculate,           !- Sensible Heat Fraction
    AlwaysOn;                !- Activity Level Schedule Name
"""


@pytest.fixture
def schema() -> IDDSchema:
    """Load the bundled 8.8 schema."""
    return get_schema("8.8")


@pytest.fixture
def idf_text() -> str:
    """Text of a small but complete model."""
    return SAMPLE_IDF


@pytest.fixture
def idf_file(tmp_path: Path) -> Path:
    """Create a temporary IDF file."""
    filepath = tmp_path / "test.idf"
    filepath.write_text(SAMPLE_IDF, encoding="latin-1")
    return filepath


@pytest.fixture
def doc(idf_file: Path) -> IDFDocument:
    """Document loaded from the sample file."""
    return IDFDocument.from_file(idf_file)


@pytest.fixture
def empty_doc() -> IDFDocument:
    """A new document holding only a Version object."""
    return new_document()


@pytest.fixture
def material_fields() -> dict[str, object]:
    """Every required Material field."""
    return {
        "name": "M1",
        "roughness": "Rough",
        "thickness": 0.1,
        "conductivity": 0.5,
        "density": 1000,
        "specific_heat": 900,
    }


@pytest.fixture
def simple_doc() -> IDFDocument:
    """Create a document with a zone, material, construction and surface, built with add()."""
    doc = new_document()
    doc.add("Zone", "TestZone", data={"x_origin": 0.0, "y_origin": 0.0, "z_origin": 0.0})
    doc.add(
        "Material",
        "TestMaterial",
        data={
            "roughness": "MediumSmooth",
            "thickness": 0.1,
            "conductivity": 1.0,
            "density": 2000.0,
            "specific_heat": 1000.0,
        },
    )
    doc.add("Construction", "TestConstruction", outside_layer="TestMaterial")
    doc.add(
        "BuildingSurface:Detailed",
        "TestWall",
        data={
            "surface_type": "Wall",
            "construction_name": "TestConstruction",
            "zone_name": "TestZone",
            "outside_boundary_condition": "Outdoors",
            "number_of_vertices": 4,
            "vertex_1_x_coordinate": 0.0,
            "vertex_1_y_coordinate": 0.0,
            "vertex_1_z_coordinate": 3.0,
            "vertex_2_x_coordinate": 0.0,
            "vertex_2_y_coordinate": 0.0,
            "vertex_2_z_coordinate": 0.0,
            "vertex_3_x_coordinate": 10.0,
            "vertex_3_y_coordinate": 0.0,
            "vertex_3_z_coordinate": 0.0,
            "vertex_4_x_coordinate": 10.0,
            "vertex_4_y_coordinate": 0.0,
            "vertex_4_z_coordinate": 3.0,
        },
    )
    return doc
