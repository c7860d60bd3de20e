import unittest

from reverse_ai.data.constants import SlotStatus
from reverse_ai.services.errors import InvalidState
from reverse_ai.services.slots import Slot

from tests.fakes import FACE, RESULT


class TestSlotLifecycle(unittest.TestCase):
    def test_new_slot_is_idle_and_empty(self):
        s = Slot(index=1, parameter=42)
        self.assertIs(s.status, SlotStatus.IDLE)
        self.assertIsNone(s.source_image)
        self.assertIsNone(s.result)
        self.assertIsNone(s.error_message)
        self.assertEqual(s.parameter, 42)

    def test_begin_enters_loading_and_stores_source(self):
        s = Slot()
        ticket = s.begin(FACE)
        self.assertEqual(ticket, 1)
        self.assertIs(s.status, SlotStatus.LOADING)
        self.assertEqual(s.source_image, FACE)
        self.assertTrue(s.is_current(ticket))

    def test_begin_requires_an_image(self):
        with self.assertRaises(InvalidState):
            Slot().begin("")

    def test_begin_while_loading_is_a_contract_violation(self):
        s = Slot()
        s.begin(FACE)
        with self.assertRaises(InvalidState):
            s.begin(FACE)
        with self.assertRaises(InvalidState):
            s.retry()

    def test_complete_sets_result_only(self):
        s = Slot()
        ticket = s.begin(FACE)
        self.assertTrue(s.complete(RESULT, ticket=ticket))
        self.assertIs(s.status, SlotStatus.SUCCESS)
        self.assertEqual(s.result, RESULT)
        self.assertIsNone(s.error_message)

    def test_fail_sets_error_only_and_keeps_source(self):
        s = Slot()
        ticket = s.begin(FACE)
        self.assertTrue(s.fail("boom", ticket=ticket))
        self.assertIs(s.status, SlotStatus.ERROR)
        self.assertEqual(s.error_message, "boom")
        self.assertIsNone(s.result)
        self.assertEqual(s.source_image, FACE)

    def test_complete_outside_loading_raises(self):
        s = Slot()
        ticket = s.begin(FACE)
        s.complete(RESULT, ticket=ticket)
        with self.assertRaises(InvalidState):
            s.complete(RESULT, ticket=ticket)

    def test_retry_reuses_stored_source_with_new_ticket(self):
        s = Slot()
        first = s.begin(FACE)
        s.fail("nope", ticket=first)
        second = s.retry()
        self.assertNotEqual(first, second)
        self.assertIs(s.status, SlotStatus.LOADING)
        self.assertEqual(s.source_image, FACE)
        self.assertIsNone(s.error_message)

    def test_retry_allowed_from_success(self):
        s = Slot()
        s.complete(RESULT, ticket=s.begin(FACE))
        s.retry()
        self.assertIs(s.status, SlotStatus.LOADING)
        self.assertIsNone(s.result)

    def test_retry_from_idle_raises(self):
        with self.assertRaises(InvalidState):
            Slot().retry()

    def test_old_ticket_is_ignored_after_retry(self):
        s = Slot()
        first = s.begin(FACE)
        s.fail("x", ticket=first)
        s.retry()
        self.assertFalse(s.complete(RESULT, ticket=first))
        self.assertIs(s.status, SlotStatus.LOADING)


class TestSlotReset(unittest.TestCase):
    def test_reset_of_idle_slot_is_a_noop(self):
        s = Slot(parameter="Japan")
        before = s.snapshot()
        s.reset()
        self.assertEqual(s.snapshot(), before)

    def test_reset_clears_everything_but_parameter(self):
        s = Slot(parameter=60)
        s.complete(RESULT, ticket=s.begin(FACE))
        s.reset()
        self.assertIs(s.status, SlotStatus.IDLE)
        self.assertIsNone(s.source_image)
        self.assertIsNone(s.result)
        self.assertEqual(s.parameter, 60)

    def test_reset_while_loading_makes_response_stale(self):
        s = Slot()
        ticket = s.begin(FACE)
        s.reset()
        self.assertFalse(s.is_current(ticket))
        self.assertFalse(s.complete(RESULT, ticket=ticket))
        self.assertFalse(s.fail("late", ticket=ticket))
        self.assertIs(s.status, SlotStatus.IDLE)
        self.assertIsNone(s.result)
        self.assertIsNone(s.error_message)

    def test_clear_result_keeps_source(self):
        s = Slot()
        s.fail("x", ticket=s.begin(FACE))
        s.clear_result()
        self.assertIs(s.status, SlotStatus.IDLE)
        self.assertEqual(s.source_image, FACE)
        self.assertIsNone(s.error_message)

    def test_clear_result_from_idle_raises(self):
        with self.assertRaises(InvalidState):
            Slot().clear_result()


class TestSlotParameter(unittest.TestCase):
    def test_frozen_parameter_is_only_editable_while_idle(self):
        s = Slot(parameter=60, freeze_parameter=True)
        s.set_parameter(30)
        ticket = s.begin(FACE)
        with self.assertRaises(InvalidState):
            s.set_parameter(40)
        s.complete(RESULT, ticket=ticket)
        with self.assertRaises(InvalidState):
            s.set_parameter(40)
        self.assertEqual(s.parameter, 30)

    def test_unfrozen_parameter_is_locked_only_while_loading(self):
        s = Slot(parameter="Japan", freeze_parameter=False)
        ticket = s.begin(FACE)
        self.assertFalse(s.can_edit_parameter)
        with self.assertRaises(InvalidState):
            s.set_parameter("Peru")
        s.complete(RESULT, ticket=ticket)
        s.set_parameter("Peru")
        self.assertEqual(s.parameter, "Peru")

    def test_attach_only_while_idle(self):
        s = Slot(freeze_parameter=False)
        s.attach(FACE)
        self.assertEqual(s.source_image, FACE)
        self.assertIs(s.status, SlotStatus.IDLE)
        s.begin(s.source_image)
        with self.assertRaises(InvalidState):
            s.attach(FACE)


class TestSlotSnapshot(unittest.TestCase):
    def test_snapshot_reports_flags_not_payloads(self):
        s = Slot(index=1, parameter="Kenya")
        s.fail("refused", ticket=s.begin(FACE))
        snap = s.snapshot()
        self.assertEqual(snap.index, 1)
        self.assertIs(snap.status, SlotStatus.ERROR)
        self.assertTrue(snap.has_source_image)
        self.assertFalse(snap.has_result)
        self.assertEqual(snap.error_message, "refused")
        self.assertEqual(snap.parameter, "Kenya")


if __name__ == "__main__":
    unittest.main()
