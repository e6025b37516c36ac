import unittest
from unittest import mock

from basetracker.adapters.chain.static_transfer_adapter import StaticTransferAdapter
from basetracker.core.dto import RawAssetTransfer
from basetracker.core.errors import DataSourceError, LookupInProgress
from basetracker.core.models import TransactionView
from basetracker.io.share import build_share_text
from basetracker.services import age
from basetracker.ports.transfer_data_port import TransferDataPort
from basetracker.services.lookup_service import FirstTransactionService
from basetracker.services.tracker_session import (
    BUSY_MESSAGE,
    EMPTY_ADDRESS_MESSAGE,
    INVALID_ADDRESS_MESSAGE,
    UNEXPECTED_MESSAGE,
    TrackerSession,
)

NOW = 1760000000
ZERO = "0x0000000000000000000000000000000000000000"
SEED = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"


class _CountingChain(StaticTransferAdapter):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.calls = 0

    def get_first_outbound_transfer(self, address):
        self.calls += 1
        return super().get_first_outbound_transfer(address)


class _ReentrantChain(StaticTransferAdapter):
    """Submits again from inside an in-flight lookup."""

    session = None
    rejected = None
    second_address = None

    def get_first_outbound_transfer(self, address):
        try:
            self.session.submit(self.second_address or address)
        except LookupInProgress as e:
            self.rejected = e
        return super().get_first_outbound_transfer(address)


class _ExplodingChain(TransferDataPort):
    def get_first_outbound_transfer(self, address):
        raise DataSourceError("HTTP 500")

    def get_block_timestamp(self, block_number):
        return None


class TrackerSessionTests(unittest.TestCase):
    def test_successful_lookup_builds_view(self) -> None:
        chain = StaticTransferAdapter(
            transfers=[RawAssetTransfer(tx_hash="0xfirst", block_number=20, from_address=SEED, to_address=ZERO)],
            block_timestamps={20: NOW - 40 * 86400},
        )
        session = TrackerSession(FirstTransactionService(chain=chain))

        result = session.submit(SEED, now_ts=NOW)

        self.assertTrue(result.ok)
        self.assertTrue(result.celebrate)
        self.assertIsNone(result.error)
        self.assertEqual(result.view.days_since, 40)
        self.assertEqual(result.view.months, 1)
        self.assertIs(session.last_result, result)
        self.assertFalse(session.busy)

    def test_unreachable_index_still_shows_simulated_result(self) -> None:
        session = TrackerSession(FirstTransactionService(chain=StaticTransferAdapter()))
        result = session.submit(ZERO, now_ts=NOW)
        self.assertTrue(result.ok)
        self.assertTrue(result.view.simulated)
        self.assertGreaterEqual(result.view.block_number, 17800000)
        self.assertGreaterEqual(result.view.days_since, 1)

    def test_invalid_address_never_looks_up(self) -> None:
        chain = _CountingChain()
        session = TrackerSession(FirstTransactionService(chain=chain))

        result = session.submit("not-an-address")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, INVALID_ADDRESS_MESSAGE)
        self.assertEqual(chain.calls, 0)

    def test_blank_address(self) -> None:
        session = TrackerSession(FirstTransactionService(chain=_CountingChain()))
        self.assertEqual(session.submit("   ").error, EMPTY_ADDRESS_MESSAGE)

    def test_unexpected_error_is_generic_and_session_recovers(self) -> None:
        session = TrackerSession(FirstTransactionService(chain=_ExplodingChain()))
        with self.assertLogs("basetracker", level="ERROR"):
            result = session.submit(ZERO, now_ts=NOW)
        self.assertEqual(result.error, UNEXPECTED_MESSAGE)
        self.assertFalse(session.busy)

        session.service = FirstTransactionService(chain=StaticTransferAdapter())
        self.assertTrue(session.submit(ZERO, now_ts=NOW).ok)

    def test_miss_without_simulation(self) -> None:
        svc = FirstTransactionService(chain=StaticTransferAdapter(), simulate_on_miss=False)
        result = TrackerSession(svc).submit(ZERO, now_ts=NOW)
        self.assertEqual(result.error, "No transactions found for this address on Base")

    def test_second_submit_while_busy_is_rejected(self) -> None:
        chain = _ReentrantChain()
        session = TrackerSession(FirstTransactionService(chain=chain))
        chain.session = session
        chain.second_address = OTHER

        result = session.submit(ZERO, now_ts=NOW)

        self.assertTrue(result.ok)
        self.assertIsInstance(chain.rejected, LookupInProgress)
        self.assertEqual(str(chain.rejected), BUSY_MESSAGE)
        self.assertFalse(session.busy)
        # the rejected submission leaves the form untouched
        self.assertEqual(session.address, ZERO)
        self.assertIs(session.last_result, result)

    def test_bad_display_timezone_is_reported_inline(self) -> None:
        session = TrackerSession(FirstTransactionService(chain=StaticTransferAdapter()))
        with mock.patch.object(age.settings, "DISPLAY_TIMEZONE", "Mars/Olympus"), \
                self.assertLogs("basetracker", level="ERROR"):
            result = session.submit(ZERO, now_ts=NOW)
        self.assertFalse(result.ok)
        self.assertEqual(result.error, UNEXPECTED_MESSAGE)
        self.assertFalse(session.busy)

    def test_prefill_from_wallet(self) -> None:
        session = TrackerSession(FirstTransactionService(chain=StaticTransferAdapter()))
        session.prefill(f" {ZERO} ")
        self.assertEqual(session.address, ZERO)
        self.assertTrue(session.submit(now_ts=NOW).ok)

        session.prefill(None)
        self.assertEqual(session.address, ZERO)


class ShareTextTests(unittest.TestCase):
    def test_sentence(self) -> None:
        view = TransactionView(
            hash="0x" + "0" * 64,
            timestamp=0,
            block_number=1,
            formatted_date="8/9/2023",
            days_since=645,
        )
        self.assertEqual(
            build_share_text(view, network="Base"),
            "I've been building on Base since 8/9/2023! It's been 645 days since my first Base transaction!",
        )


if __name__ == "__main__":
    unittest.main()
