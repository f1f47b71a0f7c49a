"""Unit tests for settings, expense categories and form profiles."""

from decimal import Decimal
from types import MappingProxyType

import pytest
import yaml

from bestellsystem.config import (
    get_app_version,
    get_configs_dir,
    get_default_output_dir,
    get_default_profile_name,
    get_default_tax_rate,
    get_department_code,
)
from bestellsystem.config.category_loader import (
    cost_type_choices,
    find_expense_category,
    get_expense_categories,
    get_expense_category_map,
    load_expense_categories_from,
    parse_categories,
)
from bestellsystem.config.profile_loader import (
    FormProfile,
    get_default_profile,
    get_profiles_dir,
    list_available_profiles,
    load_profile,
)


class TestSettings:
    """Test environment driven settings."""

    def test_defaults(self):
        assert get_department_code() == "THA"
        assert get_default_tax_rate() == Decimal("19")
        assert get_default_profile_name() == "default"
        assert get_configs_dir().name == "configs"

    def test_department_code_from_env(self, monkeypatch):
        monkeypatch.setenv("BESTELLSYSTEM_DEPARTMENT", " informatik ")
        assert get_department_code() == "INFOR"

    @pytest.mark.parametrize("raw,expected", [("7", Decimal("7")), ("7,5", Decimal("7.5")), ("abc", Decimal("19")), ("120", Decimal("19"))])
    def test_tax_rate_from_env(self, monkeypatch, raw, expected):
        monkeypatch.setenv("BESTELLSYSTEM_TAX_RATE", raw)
        assert get_default_tax_rate() == expected

    def test_output_dir_is_created(self, monkeypatch, tmp_path):
        target = tmp_path / "out" / "nested"
        monkeypatch.setenv("BESTELLSYSTEM_OUTPUT_DIR", str(target))
        assert get_default_output_dir() == target
        assert target.is_dir()

    def test_app_version(self):
        assert get_app_version() == "0.1.0"


class TestExpenseCategories:
    """Test the Kostenarten reference table."""

    def test_bundled_table(self):
        categories = get_expense_categories()
        assert len(categories) == 27
        assert categories[0].code == "60100"
        assert categories[0].label == "60100 - Geschäftsbedarf"
        assert isinstance(categories, tuple)

    def test_loaded_once(self):
        assert get_expense_categories() is get_expense_categories()

    def test_map_is_read_only(self):
        mapping = get_expense_category_map()
        assert isinstance(mapping, MappingProxyType)
        with pytest.raises(TypeError):
            mapping["99999"] = None

    def test_find(self):
        assert find_expense_category("60110").name == "Papier"
        assert find_expense_category(" 60110 ").name == "Papier"
        assert find_expense_category("00000") is None

    def test_cost_type_choices(self):
        codes, labels = cost_type_choices("60110")
        assert codes[0] == ""
        assert len(codes) == 28
        assert labels["60110"] == "60110 - Papier"

    def test_cost_type_choices_keep_unknown_code(self):
        codes, labels = cost_type_choices("682100")
        assert codes[-1] == "682100"
        assert labels["682100"] == "682100 (nicht in der Liste)"
        assert len(codes) == 29

    def test_parse_accepts_plain_list(self):
        categories = parse_categories([{"code": "1", "name": "A"}, {"code": "2", "name": "B"}])
        assert [c.code for c in categories] == ["1", "2"]

    @pytest.mark.parametrize(
        "data",
        [
            {"categories": "nope"},
            [{"code": "1", "name": "A"}, {"code": "1", "name": "B"}],
            ["not a mapping"],
            [{"code": "1"}],
        ],
    )
    def test_parse_rejects_invalid(self, data):
        with pytest.raises(ValueError):
            parse_categories(data)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_expense_categories_from(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "expense_categories.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ValueError):
            load_expense_categories_from(path)

    def test_config_dir_override(self, monkeypatch, tmp_path):
        (tmp_path / "expense_categories.yaml").write_text(
            yaml.safe_dump({"categories": [{"code": "12345", "name": "Test"}]}),
            encoding="utf-8",
        )
        monkeypatch.setenv("BESTELLSYSTEM_CONFIG_DIR", str(tmp_path))
        assert [c.code for c in get_expense_categories()] == ["12345"]


class TestProfiles:
    """Test form profiles."""

    def test_list_profiles(self):
        profiles = list_available_profiles()
        assert "default" in profiles
        assert "sample" in profiles

    def test_default_profile(self):
        profile = get_default_profile()
        assert profile.name == "default"
        assert profile.details["contact_person"] == "Prof. Biedermann"
        assert profile.items == []

    def test_sample_profile(self, sample_profile):
        assert sample_profile.details["supplier_name"] == "Völkner Elektronik"
        assert len(sample_profile.items) == 3

    def test_missing_profile(self):
        with pytest.raises(FileNotFoundError):
            load_profile("does-not-exist")

    def test_invalid_yaml(self, monkeypatch, tmp_path):
        (tmp_path / "profiles").mkdir()
        (tmp_path / "profiles" / "broken.yaml").write_text("details: [unclosed", encoding="utf-8")
        monkeypatch.setenv("BESTELLSYSTEM_CONFIG_DIR", str(tmp_path))
        with pytest.raises(ValueError):
            load_profile("broken")

    def test_non_mapping_profile(self, monkeypatch, tmp_path):
        (tmp_path / "profiles").mkdir()
        (tmp_path / "profiles" / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")
        monkeypatch.setenv("BESTELLSYSTEM_CONFIG_DIR", str(tmp_path))
        with pytest.raises(ValueError):
            load_profile("list")

    def test_name_defaults_to_file_stem(self, monkeypatch, tmp_path):
        (tmp_path / "profiles").mkdir()
        (tmp_path / "profiles" / "lab.yaml").write_text("description: Labor\n", encoding="utf-8")
        monkeypatch.setenv("BESTELLSYSTEM_CONFIG_DIR", str(tmp_path))
        assert load_profile("lab").name == "lab"
        assert get_profiles_dir() == tmp_path / "profiles"

    def test_default_profile_fallback(self, monkeypatch, tmp_path):
        monkeypatch.setenv("BESTELLSYSTEM_CONFIG_DIR", str(tmp_path))
        profile = get_default_profile()
        assert profile.name == "default"
        assert profile.details == {}
        assert list_available_profiles() == ["default"]

    def test_round_trip_dict(self):
        profile = FormProfile(name="x", items=[{"description": "A"}])
        assert FormProfile.from_dict(profile.to_dict()) == profile
