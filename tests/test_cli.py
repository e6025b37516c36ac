import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from basetracker.cli import main as cli
from basetracker.config import settings
from basetracker.core.models import TransactionView
from basetracker.io.output_writer import write_result_html

NOW = 1760000000
ZERO = "0x0000000000000000000000000000000000000000"


class CliTests(unittest.TestCase):
    def _run(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = cli.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_static_lookup_prints_result_and_writes_outputs(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, out, _ = self._run(
                "--address", ZERO, "--use-static", "--now-ts", str(NOW), "--out", tmp, "--json", "--html",
            )

            self.assertEqual(code, 0)
            self.assertIn("Genesis Moment", out)
            self.assertIn("I've been building on", out)

            data = json.loads((Path(tmp) / "result.json").read_text(encoding="utf-8"))
            self.assertEqual(data["address"], ZERO)
            self.assertTrue(data["simulated"])
            self.assertGreaterEqual(data["block_number"], 17800000)
            self.assertGreaterEqual(data["days_since"], 1)

            page = (Path(tmp) / "index.html").read_text(encoding="utf-8")
            self.assertEqual(page.count('class="confetti"'), 150)

    def test_invalid_address_exit_code(self) -> None:
        code, _, err = self._run("--address", "not-an-address", "--use-static")
        self.assertEqual(code, 1)
        self.assertIn("Invalid Ethereum address format", err)

    def test_missing_address(self) -> None:
        with mock.patch.object(settings, "CONNECTED_WALLET_ADDRESS", None):
            code, _, err = self._run("--use-static")
        self.assertEqual(code, 2)
        self.assertIn("Missing --address", err)

    def test_connected_wallet_prefills_address(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, \
                mock.patch.object(settings, "CONNECTED_WALLET_ADDRESS", ZERO):
            code, out, _ = self._run("--use-static", "--now-ts", str(NOW), "--out", tmp)
        self.assertEqual(code, 0)
        self.assertIn(ZERO, out)

    def test_missing_api_key(self) -> None:
        with mock.patch.object(settings, "ALCHEMY_API_KEY", None):
            code, _, err = self._run("--address", ZERO)
        self.assertEqual(code, 2)
        self.assertIn("ALCHEMY_API_KEY", err)

    def test_frame_metadata(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, out, _ = self._run("--address", ZERO, "--frame", "--now-ts", str(NOW), "--out", tmp)
            self.assertEqual(code, 0)
            self.assertIn('property="fc:frame"', out)
            self.assertTrue((Path(tmp) / "frame.html").exists())
            self.assertFalse((Path(tmp) / "frame.json").exists())

    def test_frame_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            code, _, _ = self._run("--address", ZERO, "--frame", "--json", "--now-ts", str(NOW), "--out", tmp)
            self.assertEqual(code, 0)

            data = json.loads((Path(tmp) / "frame.json").read_text(encoding="utf-8"))
            self.assertEqual(data["address"], ZERO)
            # seed 0x00000000 -> 0 % 365 + 1
            self.assertEqual(data["transaction_data"]["days_since"], 1)
            self.assertEqual(data["transaction_data"]["hash"], "0x" + "0" * 64)


class ResultPageTests(unittest.TestCase):
    def _view(self, simulated: bool) -> TransactionView:
        return TransactionView(
            hash="0x" + "ab" * 32,
            timestamp=NOW - 40 * 86400,
            block_number=20000000,
            formatted_date="9/9/2025",
            days_since=40,
            simulated=simulated,
        )

    def test_simulated_result_carries_estimate_note(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            page = Path(write_result_html(self._view(True), tmp, address=ZERO, confetti_seed=1)).read_text(encoding="utf-8")
            self.assertIn("this date is an estimate", page)

            page = Path(write_result_html(self._view(False), tmp, address=ZERO, confetti_seed=1)).read_text(encoding="utf-8")
            self.assertNotIn("this date is an estimate", page)
            self.assertIn("20,000,000", page)

    def test_address_is_escaped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = write_result_html(self._view(False), tmp, address='<script>alert("x")</script>')
            page = Path(path).read_text(encoding="utf-8")
        self.assertNotIn("<script>", page)
        self.assertIn("&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt;", page)


if __name__ == "__main__":
    unittest.main()
