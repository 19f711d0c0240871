import io
import unittest

from rich.console import Console

from mixcloud_uploader.models import Track, UploadResponse
from mixcloud_uploader.reporting import Terminal, reconcile_response, report_outcome, share_url


def _make_terminal() -> tuple[Terminal, io.StringIO, io.StringIO]:
    out, err = io.StringIO(), io.StringIO()
    terminal = Terminal(
        out=Console(file=out, highlight=False, soft_wrap=True),
        err=Console(file=err, highlight=False, soft_wrap=True),
    )
    return terminal, out, err


TRACKLIST = [Track("Chicane", "Sunstroke", 64), Track("Will Atkinson", "Isolator", 7291)]


class ReconcileTests(unittest.TestCase):
    def test_error_response_is_failure(self) -> None:
        response = UploadResponse.model_validate({"error": {"message": "Invalid token"}})

        outcome = reconcile_response(response)

        self.assertFalse(outcome.success)
        self.assertEqual(outcome.message, "Invalid token")
        self.assertIsNone(outcome.url)

    def test_error_wins_over_result(self) -> None:
        response = UploadResponse.model_validate(
            {"error": {"message": "Bad"}, "result": {"success": True, "key": "/x/"}}
        )
        self.assertFalse(reconcile_response(response).success)

    def test_success_response_builds_share_url(self) -> None:
        response = UploadResponse.model_validate({"result": {"success": True, "key": "/user/show/mycast/"}})

        outcome = reconcile_response(response)

        self.assertTrue(outcome.success)
        self.assertEqual(outcome.url, "https://mixcloud.com/user/show/mycast/edit")

    def test_unsuccessful_result_is_failure(self) -> None:
        response = UploadResponse.model_validate({"result": {"success": False, "key": "/x/"}})
        outcome = reconcile_response(response)
        self.assertFalse(outcome.success)
        self.assertEqual(outcome.message, "Error uploading, no success")

    def test_empty_response_is_failure(self) -> None:
        outcome = reconcile_response(UploadResponse.model_validate({}))
        self.assertFalse(outcome.success)

    def test_share_url(self) -> None:
        self.assertEqual(share_url("/dj/mix/"), "https://mixcloud.com/dj/mix/edit")


class ReportOutcomeTests(unittest.TestCase):
    def test_error_prints_message_and_details_but_no_tracklist(self) -> None:
        terminal, out, err = _make_terminal()
        response = UploadResponse.model_validate(
            {"error": {"message": "Invalid token"}, "details": {"mp3": ["This field is required."]}}
        )

        ok = report_outcome(reconcile_response(response), TRACKLIST, terminal)

        self.assertFalse(ok)
        self.assertIn("Invalid token", err.getvalue())
        self.assertIn("This field is required.", err.getvalue())
        self.assertNotIn("Tracklist", out.getvalue())
        self.assertNotIn("1. Chicane-Sunstroke", out.getvalue())

    def test_success_prints_url_then_tracklist_in_order(self) -> None:
        terminal, out, _ = _make_terminal()
        response = UploadResponse.model_validate({"result": {"success": True, "key": "/user/show/mycast/"}})

        ok = report_outcome(reconcile_response(response), TRACKLIST, terminal)

        self.assertTrue(ok)
        lines = out.getvalue().splitlines()
        self.assertEqual(
            lines,
            [
                "Successfully uploaded file",
                "https://mixcloud.com/user/show/mycast/edit",
                "Tracklist",
                "1. Chicane-Sunstroke",
                "2. Will Atkinson-Isolator",
            ],
        )

    def test_success_without_tracklist_prints_no_heading(self) -> None:
        terminal, out, _ = _make_terminal()
        response = UploadResponse.model_validate({"result": {"success": True, "key": "/a/b/"}})

        self.assertTrue(report_outcome(reconcile_response(response), [], terminal))
        self.assertNotIn("Tracklist", out.getvalue())


if __name__ == "__main__":
    unittest.main()
