import json

import pytest

from config import (
    EXPORT_VERSION,
    ImportDataError,
    dict_to_group,
    export_data,
    group_to_dict,
    import_data,
    load_groups,
    load_settings,
    save_groups,
    save_settings,
)
from models import Settings


def test_group_dict_uses_web_keys(abc_group):
    abc_group.tip_percentage = 10
    abc_group.payment_groups = [["a", "b"]]
    d = group_to_dict(abc_group)

    assert d["tipPercentage"] == 10
    assert d["paymentGroups"] == [["a", "b"]]
    assert d["items"][1]["appliesToEveryone"] is False
    assert d["items"][1]["selectedPeople"] == ["a"]
    assert dict_to_group(d) == abc_group


def test_optional_fields_omitted(abc_group):
    d = group_to_dict(abc_group)
    assert "tipPercentage" not in d
    assert "paymentGroups" not in d
    group = dict_to_group(d)
    assert group.tip_percentage is None
    assert group.payment_groups is None


def test_save_and_load_groups(tmp_path, abc_group):
    path = str(tmp_path / "groups.json")
    save_groups([abc_group], path)
    assert load_groups(path) == [abc_group]


def test_load_groups_missing_file(tmp_path):
    assert load_groups(str(tmp_path / "missing.json")) == []


def test_default_paths_follow_env(tmp_path, monkeypatch, abc_group):
    monkeypatch.setenv("SPLITGROUPS_DATA_DIR", str(tmp_path / "data"))
    save_groups([abc_group])
    assert (tmp_path / "data" / "expense-groups.json").exists()
    assert load_groups() == [abc_group]


def test_settings_round_trip_and_defaults(tmp_path):
    path = str(tmp_path / "settings.json")
    assert load_settings(path) == Settings()
    settings = Settings(currency="USD", language="en", theme="dark")
    save_settings(settings, path)
    assert load_settings(path) == settings


def test_settings_ignore_web_only_keys(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"currency": "BRL", "theme": "light", "pixKey": "me@example.com"}), encoding="utf-8")
    settings = load_settings(str(path))
    assert settings == Settings(currency="BRL", theme="light")
    save_settings(settings, str(path))
    assert "pixKey" not in json.loads(path.read_text(encoding="utf-8"))


def test_unknown_theme_falls_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"currency": "EUR", "theme": "neon"}), encoding="utf-8")
    assert load_settings(str(path)).theme == "system"


def test_export_import_round_trip(abc_group):
    text = export_data([abc_group], Settings(currency="USD", theme="light"))
    assert json.loads(text)["version"] == EXPORT_VERSION
    groups, settings = import_data(text)
    assert groups == [abc_group]
    assert settings == Settings(currency="USD", theme="light")


@pytest.mark.parametrize("text", [
    "not json",
    "[]",
    json.dumps({"groups": [], "settings": {}, "version": "0.9"}),
    json.dumps({"groups": [{"name": "no id"}], "settings": {}, "version": EXPORT_VERSION}),
    json.dumps({"groups": ["oops"], "settings": {}, "version": EXPORT_VERSION}),
    json.dumps({"groups": {"id": "g"}, "settings": {}, "version": EXPORT_VERSION}),
    json.dumps({"groups": [], "settings": ["x"], "version": EXPORT_VERSION}),
    json.dumps({"groups": [{"id": "g", "name": "G", "people": ["ana"]}], "settings": {}, "version": EXPORT_VERSION}),
])
def test_import_rejects_bad_payloads(text):
    with pytest.raises(ImportDataError):
        import_data(text)


def test_import_rejects_invalid_group(abc_group):
    abc_group.items[0].price = -1
    text = export_data([abc_group], Settings())
    with pytest.raises(ImportDataError) as exc:
        import_data(text)
    assert "unit price" in str(exc.value)
