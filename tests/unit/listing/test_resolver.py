"""Listing request resolution tests.

Verifies selector validation, per-object error routing, and not-found lines.
Prevents regressions where one broken object stops a repository listing.
"""

from __future__ import annotations

import io
import unittest
from datetime import datetime, timezone
from typing import Iterator

from ocflview.display import DisplayConfig
from ocflview.errors import ConfigurationError, RepositoryQueryError
from ocflview.listing.resolver import ListingRequest, parse_version_selector, run_listing
from ocflview.listing.types import SortField
from ocflview.report import ErrorReporter
from ocflview.repository.types import FileDetails, ObjectResult, ObjectSummary, ObjectVersionView, VersionId

CREATED = datetime(2020, 1, 1, tzinfo=timezone.utc)
UTC_DISPLAY = DisplayConfig(timezone=timezone.utc)


def summary(identifier: str) -> ObjectSummary:
    return ObjectSummary(identifier, VersionId(1), CREATED, f"/store/{identifier}")


class FakeRepository:
    def __init__(
        self,
        results: list[ObjectResult] | None = None,
        views: dict[tuple[str, VersionId | None], ObjectVersionView] | None = None,
        list_error: Exception | None = None,
        get_error: Exception | None = None,
    ) -> None:
        self.results = results or []
        self.views = views or {}
        self.list_error = list_error
        self.get_error = get_error
        self.pulled = 0
        self.get_calls: list[tuple[str, VersionId | None]] = []

    def list_objects(self) -> Iterator[ObjectResult]:
        if self.list_error is not None:
            raise self.list_error
        return self._iterate()

    def _iterate(self) -> Iterator[ObjectResult]:
        for result in self.results:
            self.pulled += 1
            yield result

    def get_object(self, object_id: str, version: VersionId | None = None) -> ObjectVersionView | None:
        self.get_calls.append((object_id, version))
        if self.get_error is not None:
            raise self.get_error
        return self.views.get((object_id, version))


def object_view() -> ObjectVersionView:
    def details(version: int, name: str) -> FileDetails:
        return FileDetails(VersionId(version), CREATED, f"/store/obj/v{version}/content/{name}", f"digest-{name}")

    return ObjectVersionView(
        id="urn:obj",
        version=VersionId(10),
        created=CREATED,
        root="/store/obj",
        digest_algorithm="sha512",
        state={"b.txt": details(10, "b.txt"), "a.txt": details(2, "a.txt"), "c.txt": details(3, "c.txt")},
    )


def run(repo: FakeRepository, request: ListingRequest) -> tuple[str, str]:
    out = io.StringIO()
    err = io.StringIO()
    reporter = ErrorReporter(UTC_DISPLAY, err=err, out=out)
    run_listing(repo, request, reporter, out=out)
    return out.getvalue(), err.getvalue()


class WholeRepositoryListingTests(unittest.TestCase):
    def test_failed_element_is_reported_and_iteration_continues(self) -> None:
        results = [
            ObjectResult.ok(summary("one")),
            ObjectResult.ok(summary("two")),
            ObjectResult.failed(RepositoryQueryError("broken inventory")),
            ObjectResult.ok(summary("four")),
            ObjectResult.ok(summary("five")),
        ]
        repo = FakeRepository(results=results)

        stdout, stderr = run(repo, ListingRequest())

        self.assertEqual([line.strip() for line in stdout.splitlines()], ["one", "two", "four", "five"])
        self.assertEqual(stderr.splitlines(), ["Error: broken inventory"])

    def test_results_are_emitted_in_enumeration_order_even_with_sort(self) -> None:
        repo = FakeRepository(results=[ObjectResult.ok(summary("b")), ObjectResult.ok(summary("a"))])

        stdout, _stderr = run(repo, ListingRequest(sort=SortField.NAME, reverse=True))

        self.assertEqual([line.strip() for line in stdout.splitlines()], ["b", "a"])

    def test_enumeration_is_pulled_lazily(self) -> None:
        repo = FakeRepository(results=[ObjectResult.ok(summary(name)) for name in ("a", "b", "c")])
        out = io.StringIO()
        seen: list[int] = []

        class RecordingStream(io.StringIO):
            def write(inner_self, text: str) -> int:
                seen.append(repo.pulled)
                return super().write(text)

        run_listing(repo, ListingRequest(), ErrorReporter(UTC_DISPLAY, err=out), out=RecordingStream())

        self.assertEqual(seen, [1, 2, 3])

    def test_failure_to_start_enumeration_aborts_with_context(self) -> None:
        repo = FakeRepository(list_error=RepositoryQueryError("Storage root /nope is not a directory"))

        with self.assertRaises(RepositoryQueryError) as ctx:
            run(repo, ListingRequest())

        self.assertEqual(str(ctx.exception), "Failed to list objects")
        self.assertIs(ctx.exception.__cause__, repo.list_error)

    def test_object_entries_render_without_digest_column(self) -> None:
        repo = FakeRepository(results=[ObjectResult.ok(summary("one"))])

        with_digest, _ = run(repo, ListingRequest(digest=True, physical=True))
        repo = FakeRepository(results=[ObjectResult.ok(summary("one"))])
        without_digest, _ = run(repo, ListingRequest(physical=True))

        self.assertEqual(with_digest, without_digest)
        self.assertEqual(with_digest, "one".ljust(42) + "\t/store/one\n")


class SingleObjectListingTests(unittest.TestCase):
    def test_lists_contents_sorted_by_name_by_default(self) -> None:
        repo = FakeRepository(views={("urn:obj", None): object_view()})

        stdout, stderr = run(repo, ListingRequest(object_id="urn:obj"))

        self.assertEqual([line.strip() for line in stdout.splitlines()], ["a.txt", "b.txt", "c.txt"])
        self.assertEqual(stderr, "")

    def test_version_sort_is_numeric_and_reversible(self) -> None:
        repo = FakeRepository(views={("urn:obj", None): object_view()})

        stdout, _ = run(repo, ListingRequest(object_id="urn:obj", sort=SortField.VERSION, long=True))
        reversed_stdout, _ = run(repo, ListingRequest(object_id="urn:obj", sort=SortField.VERSION, reverse=True))

        self.assertEqual([line.split("\t")[0] for line in stdout.splitlines()], ["   v2", "   v3", "  v10"])
        self.assertEqual([line.strip() for line in reversed_stdout.splitlines()], ["b.txt", "c.txt", "a.txt"])

    def test_digest_column_is_rendered_for_files(self) -> None:
        repo = FakeRepository(views={("urn:obj", None): object_view()})

        stdout, _ = run(repo, ListingRequest(object_id="urn:obj", digest=True))

        self.assertEqual(stdout.splitlines()[0], "a.txt".ljust(42) + "\tsha512:digest-a.txt")

    def test_version_selector_is_passed_to_repository(self) -> None:
        repo = FakeRepository(views={("urn:obj", VersionId(2)): object_view()})

        run(repo, ListingRequest(object_id="urn:obj", version="2"))

        self.assertEqual(repo.get_calls, [("urn:obj", VersionId(2))])

    def test_missing_object_prints_informational_line(self) -> None:
        repo = FakeRepository()

        stdout, stderr = run(repo, ListingRequest(object_id="urn:missing"))

        self.assertEqual(stdout, "Object urn:missing was not found\n")
        self.assertEqual(stderr, "")

    def test_missing_version_names_the_version(self) -> None:
        repo = FakeRepository()

        stdout, _ = run(repo, ListingRequest(object_id="urn:obj", version=4))

        self.assertEqual(stdout, "Object urn:obj version v4 was not found\n")

    def test_invalid_selector_fails_before_any_query(self) -> None:
        for selector in ("0", "-1", "abc", 0):
            with self.subTest(selector=selector):
                repo = FakeRepository()
                with self.assertRaises(ConfigurationError):
                    run(repo, ListingRequest(object_id="urn:obj", version=selector))
                self.assertEqual(repo.get_calls, [])

    def test_query_error_propagates(self) -> None:
        repo = FakeRepository(get_error=RepositoryQueryError("corrupt"))

        with self.assertRaises(RepositoryQueryError):
            run(repo, ListingRequest(object_id="urn:obj"))


class ParseVersionSelectorTests(unittest.TestCase):
    def test_none_means_head(self) -> None:
        self.assertIsNone(parse_version_selector(None))

    def test_accepts_strings_and_ints(self) -> None:
        self.assertEqual(parse_version_selector("7"), VersionId(7))
        self.assertEqual(parse_version_selector(7), VersionId(7))

    def test_rejects_booleans(self) -> None:
        with self.assertRaises(ConfigurationError):
            parse_version_selector(True)

    def test_rejects_non_decimal_text(self) -> None:
        for selector in ("1_0", "1.0", "0x1", "\u0663", "", "v2"):
            with self.subTest(selector=selector):
                with self.assertRaises(ConfigurationError):
                    parse_version_selector(selector)

    def test_accepts_surrounding_whitespace_and_plus_sign(self) -> None:
        self.assertEqual(parse_version_selector(" 3 "), VersionId(3))
        self.assertEqual(parse_version_selector("+3"), VersionId(3))


if __name__ == "__main__":
    unittest.main()
