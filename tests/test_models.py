import dataclasses

import pytest

from hogsearch.core.models import DEFAULT_FIELD_PREFIXES, SearchConfig


def test_create_lowercases_term():
    config = SearchConfig.create("AKIAExample", "exact")
    assert config.term == "akiaexample"
    assert config.mode == "exact"
    assert config.field == ""
    assert config.prefixes == DEFAULT_FIELD_PREFIXES


def test_extra_prefixes_are_appended_without_duplicates():
    config = SearchConfig.create("x", extra_prefixes=["ExtraData.", "", "ExtraData."])
    assert config.prefixes == ("", "SourceMetadata.Data.Github.", "ExtraData.")


def test_config_is_immutable():
    config = SearchConfig.create("x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.term = "y"  # type: ignore[misc]


@pytest.mark.parametrize("term, mode", [("", "contains"), ("x", "regex"), ("x", "EXACT")])
def test_create_rejects_invalid_settings(term, mode):
    with pytest.raises(ValueError):
        SearchConfig.create(term, mode)
