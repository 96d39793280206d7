import unittest
from unittest.mock import AsyncMock, MagicMock

from src.content.blog_assistant import BlogAssistant, parse_json_response
from src.shared.models import BlogGenerationRequest, BlogLanguage


def assistant_returning(text=None, error=None) -> BlogAssistant:
    client = MagicMock()
    client.generate = AsyncMock(return_value=text, side_effect=error)
    return BlogAssistant(client=client)


class ParseJsonResponseTests(unittest.TestCase):
    def test_strips_code_fences(self):
        text = '```json\n{"title": "Hi", "tags": ["a"]}\n```'
        self.assertEqual(parse_json_response(text), {"title": "Hi", "tags": ["a"]})

    def test_extracts_object_from_surrounding_text(self):
        text = 'Sure! Here it is: {"title": "Hi"} Enjoy.'
        self.assertEqual(parse_json_response(text), {"title": "Hi"})

    def test_garbage_is_none(self):
        self.assertIsNone(parse_json_response("not json at all"))
        self.assertIsNone(parse_json_response("[1, 2, 3]"))


class DisabledAssistantTests(unittest.IsolatedAsyncioTestCase):
    async def test_every_operation_returns_sentinel_without_key(self):
        assistant = BlogAssistant(api_key="")
        self.assertFalse(assistant.available)
        self.assertIsNone(await assistant.generate_post(BlogGenerationRequest(topic="x")))
        self.assertIsNone(await assistant.improve_content("x"))
        self.assertIsNone(await assistant.generate_title("x"))
        self.assertIsNone(await assistant.generate_excerpt("x"))
        self.assertEqual(await assistant.generate_tags("x"), [])
        self.assertIsNone(await assistant.translate("x", "pl"))


class BlogAssistantTests(unittest.IsolatedAsyncioTestCase):
    async def test_generate_post(self):
        text = (
            '```json\n{"title": "Build a Shop in 30 Days", '
            '"content": "## Start<script>alert(1)</script>", '
            '"excerpt": "How to.", "tags": ["a","b","c","d","e","f","g","h","i","j","k","l"]}\n```'
        )
        assistant = assistant_returning(text)
        post = await assistant.generate_post(
            BlogGenerationRequest(topic="shops", keywords=["ecommerce"], language=BlogLanguage.PL)
        )

        self.assertEqual(post.title, "Build a Shop in 30 Days")
        self.assertEqual(post.slug, "build-a-shop-in-30-days")
        self.assertNotIn("<script>", post.content)
        self.assertNotIn("alert(1)", post.content)
        self.assertIn("## Start", post.content)
        self.assertEqual(len(post.tags), 10)

        prompt = assistant.client.generate.call_args.args[0]
        self.assertIn('"shops"', prompt)
        self.assertIn("Polish", prompt)
        self.assertIn("ecommerce", prompt)

    async def test_generate_post_defaults_missing_title(self):
        assistant = assistant_returning('{"content": "body"}')
        post = await assistant.generate_post(BlogGenerationRequest(topic="x"))
        self.assertEqual(post.title, "Untitled Post")
        self.assertEqual(post.tags, [])

    async def test_generate_post_parse_failure_is_none(self):
        assistant = assistant_returning("I cannot do that")
        self.assertIsNone(await assistant.generate_post(BlogGenerationRequest(topic="x")))

    async def test_provider_error_is_swallowed(self):
        assistant = assistant_returning(error=RuntimeError("quota"))
        self.assertIsNone(await assistant.generate_post(BlogGenerationRequest(topic="x")))
        self.assertIsNone(await assistant.improve_content("x"))
        self.assertEqual(await assistant.generate_tags("x"), [])

    async def test_generate_title_picks_first_line_without_numbering(self):
        assistant = assistant_returning("1. First Title\n2. Second Title\n")
        self.assertEqual(await assistant.generate_title("content"), "First Title")

    async def test_title_prompt_uses_content_preview(self):
        assistant = assistant_returning("Title")
        await assistant.generate_title("x" * 5000)
        prompt = assistant.client.generate.call_args.args[0]
        self.assertIn("x" * 1000 + "...", prompt)
        self.assertNotIn("x" * 1001, prompt)

    async def test_generate_tags(self):
        assistant = assistant_returning(" Python, FastAPI , ,Web,API,Cloud,Docs,Tests,CI,Extra ")
        tags = await assistant.generate_tags("content")
        self.assertEqual(tags, ["python", "fastapi", "web", "api", "cloud", "docs", "tests", "ci"])

    async def test_improve_content_is_sanitized(self):
        assistant = assistant_returning('Better <img src="x" onerror="alert(1)"> text')
        improved = await assistant.improve_content("text", ["grammar"])
        self.assertNotIn("onerror", improved)
        self.assertIn("Better", improved)
        self.assertIn("grammar", assistant.client.generate.call_args.args[0])

    async def test_translate(self):
        assistant = assistant_returning("Cześć świecie")
        self.assertEqual(await assistant.translate("Hello world", "pl"), "Cześć świecie")
        self.assertIn("Polish (Polski)", assistant.client.generate.call_args.args[0])

    async def test_translate_unsupported_language(self):
        assistant = assistant_returning("Hallo")
        self.assertIsNone(await assistant.translate("Hello", "de"))
        assistant.client.generate.assert_not_called()


if __name__ == "__main__":
    unittest.main()
