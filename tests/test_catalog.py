"""
Unit tests for the course catalog source.

Catalog contract:
- {"courses": {...}}, {id: record} and [record, ...] are all accepted
- every field is coerced to a string, missing values become ""
- missing/invalid cache file -> empty catalog
"""

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import requests

from courseplan.catalog import fetch_catalog, load_catalog, normalize_catalog, save_catalog, update_course
from courseplan.errors import CatalogError
from courseplan.model import Course


class TestNormalizeCatalog(unittest.TestCase):
    def test_wrapped_mapping(self) -> None:
        data = {"courses": {"F101": {"term": "Fall", "number": "101", "meets": "MWF 9:00-9:50", "title": "Intro"}}}
        courses = normalize_catalog(data)
        self.assertEqual(courses, {"F101": Course(term="Fall", number="101", title="Intro", meets="MWF 9:00-9:50")})

    def test_fields_are_coerced_to_strings(self) -> None:
        courses = normalize_catalog({"F101": {"term": "Fall", "number": 101, "meets": None}})
        c = courses["F101"]
        self.assertEqual(c.number, "101")
        self.assertEqual(c.meets, "")
        self.assertEqual(c.title, "")

    def test_list_uses_id_or_term_and_number(self) -> None:
        data = [
            {"id": "X1", "term": "Fall", "number": "1"},
            {"term": "Winter", "number": "213"},
            {"number": "7"},
            {"term": "Spring"},
        ]
        courses = normalize_catalog(data)
        self.assertEqual(sorted(courses), ["S3", "W213", "X1", "X7"])

    def test_non_object_entries_are_skipped(self) -> None:
        courses = normalize_catalog({"F101": {"term": "Fall"}, "bad": "oops"})
        self.assertEqual(list(courses), ["F101"])

    def test_unexpected_shape_raises(self) -> None:
        with self.assertRaises(CatalogError):
            normalize_catalog("not a catalog")


class TestFetchCatalog(unittest.TestCase):
    def test_fetch_normalizes_response(self) -> None:
        resp = mock.Mock()
        resp.json.return_value = {"courses": {"F101": {"term": "Fall", "number": "101", "title": "Intro"}}}
        with mock.patch("courseplan.catalog.requests.get", return_value=resp) as get:
            courses = fetch_catalog("https://example.org/courses.json", timeout=5)

        get.assert_called_once_with("https://example.org/courses.json", timeout=5)
        resp.raise_for_status.assert_called_once()
        self.assertEqual(courses["F101"].title, "Intro")

    def test_http_error_propagates(self) -> None:
        resp = mock.Mock()
        resp.raise_for_status.side_effect = requests.HTTPError("404")
        with mock.patch("courseplan.catalog.requests.get", return_value=resp):
            with self.assertRaises(requests.HTTPError):
                fetch_catalog("https://example.org/missing.json")

    def test_non_json_response_raises_catalog_error(self) -> None:
        resp = mock.Mock()
        resp.json.side_effect = ValueError("no json")
        with mock.patch("courseplan.catalog.requests.get", return_value=resp):
            with self.assertRaises(CatalogError):
                fetch_catalog("https://example.org/page.html")


class TestCatalogCache(unittest.TestCase):
    def test_load_missing_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            self.assertEqual(load_catalog(Path(d) / "missing.json"), {})

    def test_load_corrupt_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "courses.json"
            p.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_catalog(p), {})

    def test_save_and_load(self) -> None:
        courses = {
            "F101": Course(term="Fall", number="101", title="Intro", meets="MWF 9:00-9:50"),
            "W213": Course(term="Winter", number="213-2", title="Systems", meets=""),
        }
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "nested" / "courses.json"
            save_catalog(courses, p)
            self.assertEqual(load_catalog(p), courses)

            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertEqual(data["W213"], {"term": "Winter", "number": "213-2", "meets": "", "title": "Systems"})


class TestUpdateCourse(unittest.TestCase):
    def test_update_returns_new_catalog(self) -> None:
        courses = {"F101": Course(term="Fall", number="101", title="Intro", meets="")}
        updated = update_course(courses, "F101", {"meets": "TuTh 14:00-15:20", "unknown": "x"})

        self.assertEqual(updated["F101"].meets, "TuTh 14:00-15:20")
        self.assertEqual(updated["F101"].title, "Intro")
        self.assertEqual(courses["F101"].meets, "")

    def test_update_unknown_id_is_noop(self) -> None:
        courses = {"F101": Course(term="Fall", number="101", title="Intro")}
        self.assertEqual(update_course(courses, "NOPE", {"title": "x"}), courses)


if __name__ == "__main__":
    unittest.main()
