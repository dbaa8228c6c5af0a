import pytest

from parcel_tracking.route_registry import ROUTES, known_ids, lookup, normalize_tracking_id


def test_presets():
    assert known_ids() == ["BLR555", "CHN123", "MUM777"]
    for tracking_id, template in ROUTES.items():
        assert template.tracking_id == tracking_id
        assert 5 <= len(template.path) <= 7


def test_blr555_template():
    template = ROUTES["BLR555"]
    assert template.origin == "Bengaluru"
    assert template.destination == "Mysuru"
    assert template.status == "Out for Delivery"
    assert len(template.path) == 5


@pytest.mark.parametrize("raw", ["chn123", "CHN123", "  Chn123\n", "\tCHN123 "])
def test_lookup_is_case_and_whitespace_insensitive(raw):
    assert lookup(raw) is ROUTES["CHN123"]


def test_lookup_unknown():
    assert lookup("ZZZ000") is None
    assert lookup("") is None
    assert lookup(None) is None


def test_normalize():
    assert normalize_tracking_id(" mum777 ") == "MUM777"
    assert normalize_tracking_id(None) == ""


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        ROUTES["NEW001"] = ROUTES["CHN123"]
