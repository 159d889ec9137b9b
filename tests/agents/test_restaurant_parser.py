"""
Tests for the response sanitizer.

Covers:
- Recovery from markdown fences and surrounding prose
- Raw control characters inside string values
- Deterministic failure when no JSON object exists
- Mapping into CitySearchResult (ids, city fill-in, cap at three)
"""

import json

import pytest

from scout.agents.restaurant.parser import (
    ResponseParseError,
    extract_json_payload,
    parse_city_search_result,
)


def _restaurant(idx: int, **overrides):
    record = {
        "id": f"r{idx}",
        "name": f"Restaurant {idx}",
        "city": "Lisbon",
        "cuisine": "Portuguese",
        "address": f"Rua {idx}, Lisboa",
        "phoneNumber": "+351 000 000",
        "mapUrl": f"https://maps.google.com/?q=r{idx}",
        "rating": 8.5,
        "reviewSummary": "Great food.",
        "tags": ["viral"],
    }
    record.update(overrides)
    return record


class TestExtractJsonPayload:
    """Tests for extract_json_payload."""

    def test_markdown_json_fence(self):
        text = '```json\n{"cityImageUrl":"x","restaurants":[]}\n```'
        assert extract_json_payload(text) == {"cityImageUrl": "x", "restaurants": []}

    def test_plain_fence(self):
        text = '```\n{"cityImageUrl":"x","restaurants":[]}\n```'
        assert extract_json_payload(text) == {"cityImageUrl": "x", "restaurants": []}

    def test_prose_around_json(self):
        text = 'Here are the results you asked for:\n{"restaurants": []}\nEnjoy your meal!'
        assert extract_json_payload(text) == {"restaurants": []}

    def test_nested_braces_use_outermost_pair(self):
        payload = {"cityImageUrl": "x", "restaurants": [{"id": "a", "name": "A"}]}
        text = f"Sure! {json.dumps(payload)} Anything else?"
        assert extract_json_payload(text) == payload

    def test_raw_newline_inside_string_becomes_space(self):
        text = '{"cityImageUrl": "x", "restaurants": [], "note": "line one\nline two"}'
        result = extract_json_payload(text)
        assert result["note"] == "line one line two"

    def test_raw_tab_and_carriage_return_tolerated(self):
        text = '{"restaurants": [], "note": "a\tb\rc"}'
        assert extract_json_payload(text)["note"] == "a b c"

    def test_trailing_commas_tolerated(self):
        text = '{"restaurants": [{"id": "a", "name": "A",},],}'
        assert extract_json_payload(text) == {"restaurants": [{"id": "a", "name": "A"}]}

    @pytest.mark.parametrize("text", [
        "I could not find any restaurants in that city.",
        "```json\nnot json at all\n```",
        "```\n```",
        "[1, 2, 3]",
    ])
    def test_no_object_fails(self, text):
        with pytest.raises(ResponseParseError):
            extract_json_payload(text)

    def test_no_braces_fails_every_time(self):
        """Same input, same failure: no partial data is ever returned."""
        text = "Sorry, the search service is busy."
        for _ in range(3):
            with pytest.raises(ResponseParseError):
                extract_json_payload(text)

    def test_unbalanced_json_fails(self):
        with pytest.raises(ResponseParseError):
            extract_json_payload('{"restaurants": [{"id": "a"}')

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_input_fails(self, text):
        with pytest.raises(ResponseParseError):
            extract_json_payload(text)


class TestParseCitySearchResult:
    """Tests for parse_city_search_result."""

    def test_full_result(self):
        payload = {
            "cityImageUrl": "https://example.com/lisbon.jpg",
            "restaurants": [_restaurant(1), _restaurant(2), _restaurant(3)],
        }
        result = parse_city_search_result(json.dumps(payload), "Lisbon")

        assert result.city_image_url == "https://example.com/lisbon.jpg"
        assert [r.id for r in result.restaurants] == ["r1", "r2", "r3"]
        first = result.restaurants[0]
        assert first.phone_number == "+351 000 000"
        assert first.map_url == "https://maps.google.com/?q=r1"
        assert first.review_summary == "Great food."
        assert first.rating == 8.5

    def test_missing_restaurants_fails(self):
        with pytest.raises(ResponseParseError):
            parse_city_search_result('{"cityImageUrl": "x"}', "Lisbon")

    def test_restaurants_not_a_list_fails(self):
        with pytest.raises(ResponseParseError):
            parse_city_search_result('{"restaurants": "none"}', "Lisbon")

    @pytest.mark.parametrize("field,expected", [
        ("rating", 0.0),
        ("address", ""),
        ("cuisine", ""),
        ("reviewSummary", ""),
        ("mapUrl", ""),
        ("phoneNumber", "N/A"),
        ("tags", []),
        ("websiteUrl", None),
    ])
    def test_null_field_falls_back_to_default(self, field, expected):
        payload = {"restaurants": [
            _restaurant(1, **{field: None}), _restaurant(2), _restaurant(3),
        ]}
        result = parse_city_search_result(json.dumps(payload), "Lisbon")

        assert len(result.restaurants) == 3
        first = result.restaurants[0].model_dump(by_alias=True)
        assert first[field] == expected

    def test_null_city_is_filled(self):
        payload = {"restaurants": [_restaurant(1, city=None)]}
        assert parse_city_search_result(json.dumps(payload), "Lisbon").restaurants[0].city == "Lisbon"

    @pytest.mark.parametrize("rating,expected", [
        ("9/10", 9.0),
        ("8.7 stars", 8.7),
        ("8,5", 8.5),
        ("excellent", 0.0),
        ({"score": 9}, 0.0),
        (True, 0.0),
    ])
    def test_loose_rating_does_not_fail(self, rating, expected):
        payload = {"restaurants": [_restaurant(1, rating=rating)]}
        result = parse_city_search_result(json.dumps(payload), "Lisbon")
        assert result.restaurants[0].rating == expected

    def test_odd_tags_are_normalized(self):
        payload = {"restaurants": [
            _restaurant(1, tags="seafood, iconic"),
            _restaurant(2, tags=["late night", None, 24]),
            _restaurant(3, tags={"a": 1}),
        ]}
        result = parse_city_search_result(json.dumps(payload), "Lisbon")
        assert [r.tags for r in result.restaurants] == [
            ["seafood", "iconic"], ["late night", "24"], [],
        ]

    @pytest.mark.parametrize("name", [None, ""])
    def test_restaurant_without_name_fails(self, name):
        payload = {"restaurants": [_restaurant(1, name=name)]}
        with pytest.raises(ResponseParseError):
            parse_city_search_result(json.dumps(payload), "Lisbon")

    def test_non_object_restaurant_fails(self):
        with pytest.raises(ResponseParseError):
            parse_city_search_result('{"restaurants": ["Ramiro"]}', "Lisbon")

    def test_missing_ids_and_city_are_filled(self):
        payload = {"restaurants": [
            _restaurant(1, id=None, city=None),
            _restaurant(2, id="", city=""),
        ]}
        result = parse_city_search_result(json.dumps(payload), "New York")

        assert [r.id for r in result.restaurants] == ["new-york-1", "new-york-2"]
        assert all(r.city == "New York" for r in result.restaurants)

    def test_numeric_id_becomes_string(self):
        payload = {"restaurants": [_restaurant(1, id=42)]}
        result = parse_city_search_result(json.dumps(payload), "Lisbon")
        assert result.restaurants[0].id == "42"

    def test_caps_at_three(self):
        payload = {"restaurants": [_restaurant(i) for i in range(1, 6)]}
        result = parse_city_search_result(json.dumps(payload), "Lisbon")
        assert [r.id for r in result.restaurants] == ["r1", "r2", "r3"]

    def test_blank_urls_become_none(self):
        payload = {
            "cityImageUrl": "",
            "restaurants": [_restaurant(1, imageUrl="", websiteUrl="N/A")],
        }
        result = parse_city_search_result(json.dumps(payload), "Lisbon")

        assert result.city_image_url is None
        assert result.restaurants[0].image_url is None
        assert result.restaurants[0].website_url is None

    def test_numeric_string_rating_accepted(self):
        payload = {"restaurants": [_restaurant(1, rating="9.1")]}
        result = parse_city_search_result(json.dumps(payload), "Lisbon")
        assert result.restaurants[0].rating == 9.1

    def test_fenced_response_with_newlines_in_review(self):
        text = (
            "```json\n"
            '{"cityImageUrl": "https://example.com/c.jpg", "restaurants": ['
            '{"id": "a", "name": "A", "reviewSummary": "Crispy\nand fresh"}]}\n'
            "```"
        )
        result = parse_city_search_result(text, "Lisbon")
        assert result.restaurants[0].review_summary == "Crispy and fresh"
