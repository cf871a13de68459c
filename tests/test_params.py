from __future__ import annotations

import pytest

from markforge.engine.params import LETTER_PARTS, SeedParameters, extract_parameters

from conftest import digest_with, sample_digests

ANCHORED = {"letter_part", "cutout_position", "interlock_depth", "letter_weight"}


def test_extraction_is_deterministic() -> None:
    digest = sample_digests(1)[0]
    first = extract_parameters(digest, "Nova")
    second = extract_parameters(digest, "Nova")
    assert first == second
    assert first.model_dump() == second.model_dump()


def test_hex_and_raw_digests_agree() -> None:
    digest = sample_digests(1)[0]
    assert extract_parameters(digest, "Nova") == extract_parameters(digest.hex(), "Nova")


@pytest.mark.parametrize("bad", [b"\x00" * 31, "abc", "zz" * 32])
def test_malformed_digest_rejected(bad: object) -> None:
    with pytest.raises(ValueError):
        extract_parameters(bad, "Nova")  # type: ignore[arg-type]


def test_ranges_hold_across_many_digests() -> None:
    for digest in sample_digests(500):
        p = extract_parameters(digest, "Range Check")
        assert 1 <= p.stroke_width <= 8
        assert 0 <= p.corner_radius <= 50
        assert 0 <= p.rotation <= 360
        assert 0.1 <= p.curve_tension <= 1.0
        assert p.element_count in {2, 3, 4, 5, 6}
        assert 1 <= p.shape_complexity <= 5
        assert 2 <= p.gradient_stops <= 5
        assert 0 <= p.cutout_position <= 11
        assert 10 <= p.interlock_depth <= 90
        assert 1 <= p.layer_count <= 4
        assert -20 <= p.offset_x <= 20
        assert 0.05 <= p.margin_ratio <= 0.2
        assert p.symmetry_type in {"bilateral", "radial", "none", "point"}


def test_extremes_map_to_range_ends() -> None:
    low = extract_parameters(bytes(32), "Nova")
    assert low.stroke_width == 1
    assert low.rotation == 0
    assert low.element_count == 2
    assert low.stroke_cap == "round"
    assert low.symmetry_type == "bilateral"

    high = extract_parameters(b"\xff" * 32, "Nova")
    assert high.stroke_width == 8
    # 0 and 360 are the same heading; byte 255 keeps the full /255 span
    assert high.rotation == 360
    assert high.element_count == 6
    assert high.shape_complexity == 5
    assert high.layer_count == 4
    assert high.margin_ratio <= 0.2
    assert high.scale_variance <= 1.2


def test_element_count_for_known_byte() -> None:
    params = extract_parameters(digest_with(b8=128), "Nova")
    assert params.element_count == 4
    assert extract_parameters(digest_with(b8=128), "Nova").element_count == 4


def test_each_field_reads_its_own_byte() -> None:
    base = extract_parameters(bytes(32), "Nova").model_dump()
    changed = extract_parameters(digest_with(b8=255), "Nova").model_dump()
    diff = {key for key in base if base[key] != changed[key]}
    assert diff == {"element_count"}


def test_brand_name_only_moves_letter_anatomy() -> None:
    digest = sample_digests(1)[0]
    a = extract_parameters(digest, "Nova").model_dump(exclude=ANCHORED)
    b = extract_parameters(digest, "Quanter").model_dump(exclude=ANCHORED)
    assert a == b


def test_letter_anatomy_is_anchored_to_name() -> None:
    params = [extract_parameters(d, "Nova") for d in sample_digests(200)]
    assert {p.letter_part for p in params} <= set(LETTER_PARTS)
    # the name byte carries 3/4 of the weight, so salts move depth by at most 64/255 of its span
    depths = [p.interlock_depth for p in params]
    assert max(depths) - min(depths) <= 80 * 64 / 255 + 1e-9


def test_camel_case_contract() -> None:
    params = extract_parameters(sample_digests(1)[0], "Nova")
    dumped = params.model_dump(by_alias=True)
    assert "strokeWidth" in dumped
    assert "cutoutPosition" in dumped
    assert SeedParameters.model_validate(dumped) == params


def test_parameters_are_frozen() -> None:
    params = extract_parameters(sample_digests(1)[0], "Nova")
    with pytest.raises(Exception):
        params.stroke_width = 2.0  # type: ignore[misc]
