import base64
import unittest
from types import SimpleNamespace

from reverse_ai.services.clients.google_ai_client import GoogleGeminiClient
from reverse_ai.services.errors import NoResult, ProviderRefused, TransportFailure

from tests.fakes import FACE


def _image_part(data: bytes) -> SimpleNamespace:
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type="image/png"), text=None)


def _text_part(text: str) -> SimpleNamespace:
    return SimpleNamespace(inline_data=None, text=text)


def _response(*parts, finish_reason="STOP") -> SimpleNamespace:
    candidate = SimpleNamespace(content=SimpleNamespace(parts=list(parts)), finish_reason=finish_reason)
    return SimpleNamespace(candidates=[candidate], prompt_feedback=None)


class _FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    async def generate_content(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def _client(response=None, error=None) -> tuple[GoogleGeminiClient, _FakeModels]:
    models = _FakeModels(response, error)
    genai_client = SimpleNamespace(aio=SimpleNamespace(models=models))
    return GoogleGeminiClient(model="test-model", genai_client=genai_client), models


class TestGoogleGeminiClient(unittest.IsolatedAsyncioTestCase):
    async def test_sends_prompt_and_decoded_image(self):
        client, models = _client(_response(_image_part(b"out")))

        await client.transform(FACE, "make it so")

        self.assertEqual(len(models.requests), 1)
        request = models.requests[0]
        self.assertEqual(request["model"], "test-model")
        prompt, part = request["contents"]
        self.assertEqual(prompt, "make it so")
        self.assertEqual(part.inline_data.data, b"face-one")
        self.assertEqual(part.inline_data.mime_type, "image/png")

    async def test_returns_largest_inline_image_as_jpeg(self):
        client, _ = _client(_response(
            _text_part("Here you go"),
            _image_part(b"small"),
            _image_part(b"much larger"),
        ))

        result = await client.transform(FACE, "p")

        self.assertEqual(
            result,
            "data:image/jpeg;base64," + base64.b64encode(b"much larger").decode("ascii"),
        )

    async def test_text_only_response_is_a_refusal(self):
        client, _ = _client(_response(_text_part("  I cannot edit this photo. ")))

        with self.assertRaises(ProviderRefused) as ctx:
            await client.transform(FACE, "p")
        self.assertEqual(ctx.exception.detail, "I cannot edit this photo.")

    async def test_empty_parts_is_no_result(self):
        client, _ = _client(_response())

        with self.assertRaises(NoResult):
            await client.transform(FACE, "p")

    async def test_no_candidates_is_no_result(self):
        client, _ = _client(SimpleNamespace(candidates=[], prompt_feedback=None))

        with self.assertRaises(NoResult):
            await client.transform(FACE, "p")

    async def test_sdk_exception_is_transport_failure(self):
        client, _ = _client(error=RuntimeError("429 RESOURCE_EXHAUSTED"))

        with self.assertRaises(TransportFailure) as ctx:
            await client.transform(FACE, "p")
        self.assertIn("RESOURCE_EXHAUSTED", ctx.exception.user_message)

    async def test_undecodable_input_is_transport_failure(self):
        client, models = _client(_response(_image_part(b"out")))

        with self.assertRaises(TransportFailure):
            await client.transform("data:image/png;base64,@@not-base64@@", "p")
        self.assertEqual(models.requests, [])


if __name__ == "__main__":
    unittest.main()
