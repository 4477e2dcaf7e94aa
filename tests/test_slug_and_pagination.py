"""Unit tests for slug derivation and list pagination/filter parsing."""

import unittest

from app.services.pagination import (
    MAX_LIMIT,
    MAX_PAGE,
    page_count,
    parse_page_params,
    parse_published,
)
from app.services.slug import slugify


class TestSlugify(unittest.TestCase):
    def test_special_characters_collapse_to_single_hyphens(self) -> None:
        self.assertEqual(
            slugify("Test Post!!! With Special @Characters#"),
            "test-post-with-special-characters",
        )

    def test_strips_edge_hyphens(self) -> None:
        self.assertEqual(slugify("  --Hello, World--  "), "hello-world")

    def test_keeps_digits(self) -> None:
        self.assertEqual(slugify("Top 10 Tips for 2024"), "top-10-tips-for-2024")

    def test_non_ascii_letters_are_treated_as_separators(self) -> None:
        self.assertEqual(slugify("Café déjà vu"), "caf-d-j-vu")


class TestPageParams(unittest.TestCase):
    def test_defaults(self) -> None:
        params = parse_page_params(None, None)
        self.assertEqual((params.page, params.limit, params.skip), (1, 10, 0))

    def test_skip_is_page_minus_one_times_limit(self) -> None:
        params = parse_page_params("3", "5")
        self.assertEqual(params.skip, 10)

    def test_values_below_one_clamp_to_one(self) -> None:
        params = parse_page_params("0", "-4")
        self.assertEqual((params.page, params.limit, params.skip), (1, 1, 0))

    def test_unparsable_values_fall_back_to_defaults(self) -> None:
        params = parse_page_params("abc", "")
        self.assertEqual((params.page, params.limit), (1, 10))

    def test_limit_is_capped(self) -> None:
        self.assertEqual(parse_page_params("1", "5000").limit, MAX_LIMIT)

    def test_huge_page_keeps_offset_in_64_bit_range(self) -> None:
        params = parse_page_params("99999999999999999999", "100")
        self.assertEqual(params.page, MAX_PAGE)
        self.assertLess(params.skip, 2**63)

    def test_page_count(self) -> None:
        self.assertEqual(page_count(2, 10), 1)
        self.assertEqual(page_count(0, 10), 0)
        self.assertEqual(page_count(21, 10), 3)


class TestParsePublished(unittest.TestCase):
    def test_absent_means_no_filter(self) -> None:
        self.assertIsNone(parse_published(None))

    def test_string_and_bool_values(self) -> None:
        self.assertIs(parse_published("true"), True)
        self.assertIs(parse_published("false"), False)
        self.assertIs(parse_published(True), True)
        self.assertIs(parse_published(False), False)

    def test_other_strings_select_unpublished(self) -> None:
        self.assertIs(parse_published("yes"), False)


if __name__ == "__main__":
    unittest.main()
