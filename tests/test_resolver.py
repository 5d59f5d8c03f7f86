import unittest as ut

import azure.core.exceptions as ace

from azstoragecmd.storage import resolve_upload_target
from azstoragecmd.storage.errors import InvalidResourceError
from tests.fakes import FakeShare


def _http_error(status_code, error_code=None):
    ex = ace.HttpResponseError(message="probe failed")
    ex.status_code = status_code
    ex.error_code = error_code
    return ex


class TestResolveUploadTarget(ut.TestCase):

    def test_empty_path(self):
        share = FakeShare()
        target = resolve_upload_target("out.txt", "", share.root())
        self.assertEqual(target.path(), "out.txt")
        self.assertEqual(share.probes, [])

    def test_none_path(self):
        share = FakeShare()
        target = resolve_upload_target("out.txt", None, share.root())
        self.assertEqual(target.path(), "out.txt")
        self.assertEqual(share.probes, [])

    def test_trailing_separator(self):
        share = FakeShare()
        target = resolve_upload_target("out.txt", "logs/", share.root())
        self.assertEqual(target.path(), "logs/out.txt")
        self.assertEqual(share.probes, [])

    def test_trailing_backslash(self):
        share = FakeShare()
        target = resolve_upload_target("out.txt", "logs\\2024\\", share.root())
        self.assertEqual(target.path(), "logs/2024/out.txt")
        self.assertEqual(share.probes, [])

    def test_nested_trailing_separator_does_not_need_existing_directory(self):
        share = FakeShare(directories=[])
        target = resolve_upload_target("out.txt", "a/b/c/", share.root())
        self.assertEqual(target.path(), "a/b/c/out.txt")
        self.assertEqual(share.probes, [])

    def test_existing_directory(self):
        share = FakeShare(directories=["archive"])
        target = resolve_upload_target("out.txt", "archive", share.root())
        self.assertEqual(target.path(), "archive/out.txt")
        self.assertEqual(share.probes, ["archive"])

    def test_missing_directory_is_file(self):
        share = FakeShare(directories=["report"])
        target = resolve_upload_target("out.txt", "report.csv", share.root())
        self.assertEqual(target.path(), "report.csv")
        self.assertEqual(target.name(), "report.csv")
        self.assertEqual(share.probes, ["report.csv"])

    def test_nested_file_under_implied_directories(self):
        share = FakeShare()
        target = resolve_upload_target("out.txt", "new/dir/data.bin", share.root())
        self.assertEqual(target.path(), "new/dir/data.bin")
        self.assertEqual(share.probes, ["new/dir/data.bin"])

    def test_nested_existing_directory(self):
        share = FakeShare(directories=["a", "a/b"])
        target = resolve_upload_target("out.txt", "a/b", share.root())
        self.assertEqual(target.path(), "a/b/out.txt")
        self.assertEqual(len(share.probes), 1)

    def test_relative_to_base_directory(self):
        share = FakeShare(directories=["base/archive"])
        base = share.root().directory(["base"])
        target = resolve_upload_target("out.txt", "archive", base)
        self.assertEqual(target.path(), "base/archive/out.txt")
        self.assertEqual(share.probes, ["base/archive"])

    def test_dot_segments(self):
        share = FakeShare()
        target = resolve_upload_target("out.txt", "./logs/../reports/", share.root())
        self.assertEqual(target.path(), "reports/out.txt")

    def test_malformed_request(self):
        share = FakeShare(probe_error=_http_error(400))
        with self.assertRaises(InvalidResourceError) as h:
            resolve_upload_target("out.txt", "bad", share.root())
        self.assertIsInstance(h.exception.__cause__, ace.HttpResponseError)
        self.assertEqual(share.probes, ["bad"])

    def test_bad_request_with_error_code_propagates(self):
        error = _http_error(400, "InvalidHeaderValue")
        share = FakeShare(probe_error=error)
        with self.assertRaises(ace.HttpResponseError) as h:
            resolve_upload_target("out.txt", "bad", share.root())
        self.assertIs(h.exception, error)

    def test_other_status_propagates(self):
        error = _http_error(403, "AuthorizationFailure")
        share = FakeShare(probe_error=error)
        with self.assertRaises(ace.HttpResponseError) as h:
            resolve_upload_target("out.txt", "secret", share.root())
        self.assertIs(h.exception, error)

    def test_other_fault_propagates(self):
        error = ace.ServiceRequestError("connection refused")
        share = FakeShare(probe_error=error)
        with self.assertRaises(ace.ServiceRequestError) as h:
            resolve_upload_target("out.txt", "somewhere", share.root())
        self.assertIs(h.exception, error)

    def test_no_probe_on_unambiguous_path_even_if_probe_would_fail(self):
        share = FakeShare(probe_error=_http_error(500))
        target = resolve_upload_target("out.txt", "logs/", share.root())
        self.assertEqual(target.path(), "logs/out.txt")
        self.assertEqual(share.probes, [])

    def test_invalid_segment(self):
        share = FakeShare()
        with self.assertRaises(InvalidResourceError):
            resolve_upload_target("out.txt", "bad|name", share.root())
        self.assertEqual(share.probes, [])
