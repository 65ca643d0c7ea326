import json
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from pklevels.config import Settings
from pklevels.dosing import dose_event_from_record, doses_from_records, load_dose_log
from pklevels.profiles import load_profiles, profile_from_record, profiles_from_records
from pklevels.simulate import chart_for, current_levels, levels_from_files
from pklevels.types import PharmacokineticProfile

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)

DOSE_LOG = [
    {"id": "m7x-1", "peptideId": "bpc-157", "name": "BPC-157", "dosage": "250mcg",
     "timestamp": "2025-03-09T12:00:00.000Z", "injectionSite": "abdomen_left"},
    {"id": "m7x-2", "peptideId": None, "name": "Creatine", "dosage": "5g",
     "timestamp": "2025-03-10T07:30:00.000Z", "notes": "with breakfast"},
    {"id": "m7x-3", "peptideId": "semaglutide", "name": "Semaglutide", "dosage": "0.25mg",
     "timestamp": "2025-03-09T12:00:00.000Z"},
]

PK_TABLE = {
    "bpc-157": {"halfLifeHours": 24, "peakTime": "30-60 min",
                "halfLife": "~24 hours", "clearanceTime": "~5 days"},
    "semaglutide": {"halfLifeHours": 168, "halfLife": "~7 days"},
}


def test_record_to_dose_event():
    d = dose_event_from_record(DOSE_LOG[0])
    assert d.id == "m7x-1"
    assert d.substance_id == "bpc-157"
    assert d.name == "BPC-157"
    assert d.dosage == "250mcg"
    assert d.injection_site == "abdomen_left"
    assert d.timestamp == datetime(2025, 3, 9, 12, 0, tzinfo=timezone.utc)


def test_free_text_record_has_no_substance_id():
    d = dose_event_from_record(DOSE_LOG[1])
    assert d.substance_id is None
    assert d.notes == "with breakfast"


def test_naive_timestamp_is_utc():
    d = dose_event_from_record({"id": "1", "name": "X", "timestamp": "2025-03-09T12:00:00"})
    assert d.timestamp.tzinfo is not None
    assert d.timestamp == datetime(2025, 3, 9, 12, 0, tzinfo=timezone.utc)


def test_offset_timestamp_keeps_instant():
    d = dose_event_from_record({"id": "1", "name": "X", "timestamp": "2025-03-09T14:00:00+02:00"})
    assert d.timestamp == datetime(2025, 3, 9, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("bad", [
    {"id": "1", "name": "X"},                                  # no timestamp
    {"id": "1", "name": "X", "timestamp": "yesterday-ish"},
    {"name": "X", "timestamp": "2025-03-09T12:00:00Z"},        # no id
])
def test_malformed_records_raise(bad):
    with pytest.raises(ValueError):
        dose_event_from_record(bad)


def test_records_keep_order():
    doses = doses_from_records(DOSE_LOG)
    assert [d.id for d in doses] == ["m7x-1", "m7x-2", "m7x-3"]


def test_profile_table():
    profiles = profiles_from_records(PK_TABLE)
    assert set(profiles) == {"bpc-157", "semaglutide"}
    assert profiles["bpc-157"] == PharmacokineticProfile(
        half_life_hours=24.0, peak_time="30-60 min",
        half_life="~24 hours", clearance_time="~5 days")
    assert profiles["semaglutide"].peak_time == ""


@pytest.mark.parametrize("entry", [
    {},
    {"halfLifeHours": 0},
    {"halfLifeHours": -2.5},
    {"halfLifeHours": None},
    {"halfLifeHours": [4]},
    {"halfLifeHours": "about a day"},
    5,
    "bpc-157",
])
def test_bad_profile_entries_raise(entry):
    with pytest.raises(ValueError):
        profile_from_record("x", entry)


def test_non_object_entry_in_table_raises():
    with pytest.raises(ValueError):
        profiles_from_records({"x": 5})


def test_profile_numeric_string_is_accepted():
    assert profile_from_record("x", {"halfLifeHours": "4"}).half_life_hours == 4.0


def test_levels_from_files(tmp_path):
    dose_file = tmp_path / "doses.json"
    pk_file = tmp_path / "pk.json"
    dose_file.write_text(json.dumps(DOSE_LOG), encoding="utf-8")
    pk_file.write_text(json.dumps(PK_TABLE), encoding="utf-8")

    levels = levels_from_files(dose_file, pk_file, now=NOW)

    # Creatine was free text, so only the two known substances show up
    assert [lvl.substance_id for lvl in levels] == ["semaglutide", "bpc-157"]
    assert np.isclose(levels[0].percentage, 100.0 * 0.5 ** (24 / 168))
    assert np.isclose(levels[1].percentage, 50.0)
    assert levels[1].next_dose_optimal == "17 hrs"
    assert levels[0].next_dose_optimal == "10.9 days"  # 1.7 * 168 - 24 = 261.6 h


def test_levels_from_files_uses_settings_paths(tmp_path):
    (tmp_path / "d.json").write_text(json.dumps(DOSE_LOG[:1]), encoding="utf-8")
    (tmp_path / "p.json").write_text(json.dumps(PK_TABLE), encoding="utf-8")
    settings = Settings(dose_log_path=tmp_path / "d.json", profiles_path=tmp_path / "p.json")

    levels = levels_from_files(now=NOW, settings=settings)
    assert [lvl.substance_id for lvl in levels] == ["bpc-157"]


def test_load_rejects_wrong_json_shape(tmp_path):
    f = tmp_path / "x.json"
    f.write_text(json.dumps({"not": "a list"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_dose_log(f)

    f.write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(ValueError):
        load_profiles(f)


def test_current_levels_defaults_to_wall_clock():
    profiles = {"a": PharmacokineticProfile(half_life_hours=24.0)}
    doses = doses_from_records([{
        "id": "1", "peptideId": "a", "name": "A",
        "timestamp": (datetime.now(timezone.utc) - timedelta(hours=24)).isoformat(),
    }])
    levels = current_levels(doses, profiles)
    assert np.isclose(levels[0].percentage, 50.0, atol=0.01)


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("PKLEVELS_CHART_POINTS", "7")
    monkeypatch.setenv("PKLEVELS_CHART_HALF_LIVES", "4")
    settings = Settings()
    assert settings.chart_points == 7

    pts = chart_for(PharmacokineticProfile(half_life_hours=2.0), settings=settings)
    assert len(pts) == 7
    assert pts[-1].hour == 8.0
