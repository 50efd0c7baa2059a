import dataclasses
from datetime import datetime, timedelta, timezone

from app.services.care_rules import GrowthRate, MaintenanceLevel, SoilTexture, parse_month, parse_zone_number
from app.services.climate import DEFAULT_CLIMATE


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_missing_fields_resolve_to_documented_defaults(make_context):
    ctx = make_context(
        plant={"maintenance": None, "growth_rate": None, "bloom_months": None, "problems": None},
        garden={"soil_texture": None, "elevation_ft": None, "urban_index": None, "maintenance": None},
    )

    assert ctx.plant.maintenance is MaintenanceLevel.medium
    assert ctx.plant.growth_rate is GrowthRate.slow
    assert ctx.plant.bloom_months == ()
    assert ctx.plant.problems == ()
    assert ctx.garden.soil_texture is SoilTexture.loam
    assert ctx.garden.elevation_ft == 0.0
    assert ctx.garden.urban_index == 0.0
    assert ctx.garden.maintenance is MaintenanceLevel.medium
    assert ctx.micro_adjustment == timedelta(0)


def test_unrecognized_enum_values_fall_back(make_context):
    ctx = make_context(plant={"maintenance": "Extreme", "growth_rate": "Glacial"}, garden={"soil_texture": "Gravel"})

    assert ctx.plant.maintenance is MaintenanceLevel.medium
    assert ctx.plant.growth_rate is GrowthRate.slow
    assert ctx.garden.soil_texture is SoilTexture.loam


def test_enum_parsing_ignores_case_and_whitespace(make_context):
    ctx = make_context(plant={"maintenance": " high ", "growth_rate": "FAST"}, garden={"soil_texture": "sand"})

    assert ctx.plant.maintenance is MaintenanceLevel.high
    assert ctx.plant.growth_rate is GrowthRate.fast
    assert ctx.garden.soil_texture is SoilTexture.sand


def test_urban_index_is_clamped(make_context):
    assert make_context(garden={"urban_index": 1.7}).garden.urban_index == 1.0
    assert make_context(garden={"urban_index": -0.2}).garden.urban_index == 0.0


def test_month_names_are_parsed_and_deduplicated(make_context):
    ctx = make_context(plant={"harvest_months": ["june", "Aug", "Smarch", "June"]})
    assert ctx.plant.harvest_months == (6, 8)


def test_parse_month():
    assert parse_month("January") == 1
    assert parse_month("dec") == 12
    assert parse_month("Ju") is None
    assert parse_month("Juneteenth") is None


def test_parse_zone_number():
    assert parse_zone_number("7a") == 7
    assert parse_zone_number("10b") == 10
    assert parse_zone_number("a7") is None
    assert parse_zone_number(None) is None


def test_zone_numbers_skip_unparseable_bounds(make_context):
    climate = dataclasses.replace(DEFAULT_CLIMATE, usda_zone_min="6b", usda_zone_max=None)
    assert make_context(climate=climate).zone_numbers == (6,)
    assert make_context().zone_numbers == (7, 8)


def test_naive_created_at_is_treated_as_utc(make_context):
    ctx = make_context(created_at=datetime(2024, 12, 1))
    assert ctx.planted_at == utc(2024, 12, 1)


def test_horizon_and_micro_adjustment(make_context):
    ctx = make_context(today=utc(2025, 3, 1), garden={"elevation_ft": 2000, "urban_index": 0.5})

    assert ctx.horizon == utc(2026, 3, 1)
    assert ctx.micro_adjustment == timedelta(days=8.5)
    assert ctx.windows.warm.start == utc(2025, 5, 21)
