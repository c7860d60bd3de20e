import asyncio
import unittest

from reverse_ai.data.constants import Mode, SlotStatus
from reverse_ai.services.mode_controller import ModeController
from reverse_ai.services.pipelines import DualSlotOrchestrator, SingleModePipeline

from tests.fakes import FACE, ControlledClient, InstantClient, settle


class TestModeController(unittest.IsolatedAsyncioTestCase):
    def test_starts_in_reverse_mode(self):
        controller = ModeController(InstantClient())
        self.assertIs(controller.mode, Mode.REVERSE)
        self.assertIsInstance(controller.pipeline, SingleModePipeline)
        self.assertFalse(controller.is_busy)

    def test_switch_to_country_builds_two_slots(self):
        controller = ModeController(InstantClient())
        self.assertTrue(controller.change_mode(Mode.COUNTRY))
        self.assertIsInstance(controller.pipeline, DualSlotOrchestrator)
        snapshot = controller.snapshot()
        self.assertIs(snapshot.mode, Mode.COUNTRY)
        self.assertEqual(len(snapshot.slots), 2)

    async def test_switch_clears_slots(self):
        controller = ModeController(InstantClient())
        await controller.pipeline.submit(FACE)
        self.assertIs(controller.pipeline.slot.status, SlotStatus.SUCCESS)

        controller.change_mode(Mode.AGE)
        controller.change_mode(Mode.REVERSE)

        self.assertIs(controller.pipeline.slot.status, SlotStatus.IDLE)
        self.assertIsNone(controller.pipeline.slot.result)
        self.assertIsNone(controller.pipeline.slot.source_image)

    async def test_switch_rejected_while_loading(self):
        client = ControlledClient()
        controller = ModeController(client)

        task = asyncio.create_task(controller.pipeline.submit(FACE))
        await settle()
        self.assertTrue(controller.is_busy)
        self.assertFalse(controller.change_mode(Mode.AGE))
        self.assertIs(controller.mode, Mode.REVERSE)

        client.calls[0].succeed()
        await task
        self.assertIs(controller.pipeline.slot.status, SlotStatus.SUCCESS)
        self.assertTrue(controller.change_mode(Mode.AGE))

    async def test_switch_rejected_while_any_country_slot_loads(self):
        client = ControlledClient()
        controller = ModeController(client, initial_mode=Mode.COUNTRY)
        controller.pipeline.attach_image(1, FACE)

        task = asyncio.create_task(controller.pipeline.generate_one(1))
        await settle()
        self.assertFalse(controller.change_mode(Mode.STYLE))

        client.calls[0].succeed()
        await task
        self.assertTrue(controller.change_mode(Mode.STYLE))

    def test_single_mode_parameter_survives_switch(self):
        controller = ModeController(InstantClient(), initial_mode=Mode.AGE)
        self.assertEqual(controller.pipeline.parameter, 60)
        controller.pipeline.set_parameter(25)

        controller.change_mode(Mode.STYLE)
        controller.change_mode(Mode.AGE)

        self.assertEqual(controller.pipeline.parameter, 25)

    def test_style_defaults_to_preset_description(self):
        controller = ModeController(InstantClient(), initial_mode=Mode.STYLE)
        self.assertIn("cyberpunk", controller.pipeline.parameter)

    def test_selecting_same_mode_resets_it(self):
        controller = ModeController(InstantClient(), initial_mode=Mode.COUNTRY)
        controller.pipeline.attach_image(0, FACE)

        self.assertTrue(controller.change_mode(Mode.COUNTRY))
        self.assertIsNone(controller.pipeline.slot(0).source_image)


if __name__ == "__main__":
    unittest.main()
