import random
import string
import unittest

from bs4 import BeautifulSoup

from ..core.html_sanitizer import (
    HtmlSanitizer,
    ImageSize,
    decode_cloaked_email,
    decode_hex,
    encode_cloaked_email,
)
from ..errors import MalformedInput


class TestDecodeCloakedEmail(unittest.TestCase):
    def test_known_payload(self):
        # key 0x42, "a@b.co"
        encoded = "42" + "".join(f"{ord(c) ^ 0x42:02x}" for c in "a@b.co")
        self.assertEqual(decode_cloaked_email(encoded), "a@b.co")

    def test_upper_case_hex(self):
        encoded = encode_cloaked_email("me@example.com", 0xAB).upper()
        self.assertEqual(decode_cloaked_email(encoded), "me@example.com")

    def test_round_trip_printable_ascii(self):
        rng = random.Random(1234)
        alphabet = string.printable
        for _ in range(200):
            text = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 40)))
            key = rng.randint(0, 255)
            with self.subTest(text=text, key=key):
                self.assertEqual(decode_cloaked_email(encode_cloaked_email(text, key)), text)

    def test_odd_length(self):
        with self.assertRaises(MalformedInput):
            decode_cloaked_email("abc")

    def test_invalid_digit(self):
        with self.assertRaises(MalformedInput):
            decode_cloaked_email("zz11")

    def test_empty_payload(self):
        with self.assertRaises(MalformedInput):
            decode_cloaked_email("")

    def test_key_only_decodes_to_empty(self):
        self.assertEqual(decode_cloaked_email("5a"), "")

    def test_malformed_input_is_value_error(self):
        with self.assertRaises(ValueError):
            decode_hex("0g")


class TestHtmlSanitizer(unittest.TestCase):
    def setUp(self):
        self.sanitizer = HtmlSanitizer()

    def _img(self, html):
        return BeautifulSoup(html, "html.parser").find("img")

    def test_untouched_html_returned_as_is(self):
        html = "<p>hello   <b>world</b></p>\n\n<img src='other.png'>  "
        result = self.sanitizer.process(html, {})
        self.assertIs(result, html)

    def test_unmatched_images_returned_as_is(self):
        html = "<div>\n  <img src='b.png' width=1>\n</div>"
        self.assertIs(self.sanitizer.process(html, {"a.png": (100, 50)}), html)

    def test_image_size_applied(self):
        result = self.sanitizer.process("<img src='a.png'>", {"a.png": (100, 50)})
        self.assertIn('width="100" height="50"', result)

    def test_attributes_keep_source_order(self):
        html = '<img src="a.png" alt="pic" class="embedded_image">'
        result = self.sanitizer.process(html, {"a.png": (8, 6)})
        self.assertEqual(result, '<img src="a.png" alt="pic" class="embedded_image" width="8" height="6"/>')

    def test_existing_size_overwritten(self):
        html = '<p><img src="a.png" width="10" height="10" alt="x"><img src="b.png"></p>'
        result = self.sanitizer.process(html, {"a.png": ImageSize(640, 480)})

        soup = BeautifulSoup(result, "html.parser")
        a, b = soup.find_all("img")
        self.assertEqual((a["width"], a["height"]), ("640", "480"))
        self.assertEqual(a["alt"], "x")
        self.assertNotIn("width", b.attrs)

    def test_cloaked_email_replaced_with_text(self):
        encoded = encode_cloaked_email("someone@example.com", 0x3C)
        html = (
            f'<p>mail <a href="/cdn-cgi/l/email-protection" class="__cf_email__" '
            f'data-cfemail="{encoded}">[email&#160;protected]</a> now</p>'
        )

        result = self.sanitizer.process(html, {})

        self.assertEqual(result, "<p>mail someone@example.com now</p>")

    def test_bad_email_isolated(self):
        good = encode_cloaked_email("ok@example.com", 0x11)
        html = (
            '<p><a class="__cf_email__" data-cfemail="abc">[email protected]</a>'
            f'<a class="__cf_email__" data-cfemail="{good}">[email protected]</a></p>'
        )

        result = self.sanitizer.process(html, {})

        soup = BeautifulSoup(result, "html.parser")
        remaining = soup.select("a.__cf_email__")
        self.assertEqual(len(remaining), 1)
        self.assertEqual(remaining[0]["data-cfemail"], "abc")
        self.assertIn("ok@example.com", soup.get_text())

    def test_only_bad_emails_returns_original(self):
        html = '<a class="__cf_email__" data-cfemail="zz11">[email protected]</a>'
        self.assertIs(self.sanitizer.process(html, {}), html)

    def test_empty_decoded_email_left_alone(self):
        html = '<a class="__cf_email__" data-cfemail="7f">[email protected]</a>'
        self.assertIs(self.sanitizer.process(html, {}), html)

    def test_images_and_emails_together(self):
        encoded = encode_cloaked_email("x@y.z", 0x01)
        html = f'<img src="p.jpg"><a class="__cf_email__" data-cfemail="{encoded}">e</a>'

        result = self.sanitizer.process(html, {"p.jpg": (3, 4)})

        img = self._img(result)
        self.assertEqual((img["width"], img["height"]), ("3", "4"))
        self.assertTrue(result.endswith("x@y.z"))

    def test_custom_selector(self):
        encoded = encode_cloaked_email("a@b.c", 0x22)
        html = f'<span class="__cf_email__" data-cfemail="{encoded}">x</span>'

        self.assertIs(self.sanitizer.process(html, {}), html)
        self.assertEqual(HtmlSanitizer(email_selector=".__cf_email__").process(html, {}), "a@b.c")


if __name__ == '__main__':
    unittest.main()
