import base64, unittest
from gmail_content.types import Attachment, MessagePart
from gmail_content.walker import (
    extract_attachments,
    extract_body,
    find_attachment_part,
    find_body_part,
    iter_parts,
)

def b64url(b: bytes) -> str:
    return base64.urlsafe_b64encode(b).decode().rstrip("=")

def text_part(mime: str, content: str) -> MessagePart:
    return MessagePart(mime_type=mime, data=b64url(content.encode("utf-8")))

def attachment(att_id: str, filename: str, mime: str, size: int) -> MessagePart:
    return MessagePart(mime_type=mime, attachment_id=att_id, filename=filename, size=size)

class TestFindBodyPart(unittest.TestCase):
    def test_first_match_wins(self):
        tree = MessagePart(mime_type="multipart/mixed", parts=[
            MessagePart(mime_type="multipart/alternative", parts=[text_part("text/plain", "first")]),
            text_part("text/plain", "second"),
        ])
        self.assertEqual(find_body_part(tree, "text/plain"), "first")

    def test_mime_type_is_case_sensitive(self):
        tree = MessagePart(mime_type="multipart/mixed", parts=[text_part("TEXT/PLAIN", "shouty")])
        self.assertIsNone(find_body_part(tree, "text/plain"))

    def test_part_without_data_is_skipped(self):
        tree = MessagePart(mime_type="multipart/mixed", parts=[
            MessagePart(mime_type="text/plain"),
            text_part("text/plain", "has data"),
        ])
        self.assertEqual(find_body_part(tree, "text/plain"), "has data")

    def test_undecodable_payload_continues_search(self):
        tree = MessagePart(mime_type="multipart/mixed", parts=[
            MessagePart(mime_type="text/plain", data="a"),
            text_part("text/plain", "good"),
        ])
        self.assertEqual(find_body_part(tree, "text/plain"), "good")

    def test_payload_outside_alphabet_is_skipped(self):
        for bad in ("aGVs!!bG8@", "+/+/", "aGVsbG8=\n"):
            with self.subTest(data=bad):
                tree = MessagePart(mime_type="text/plain", data=bad)
                self.assertIsNone(find_body_part(tree, "text/plain"))

    def test_malformed_payload_falls_through_to_sibling(self):
        tree = MessagePart(mime_type="multipart/alternative", parts=[
            MessagePart(mime_type="text/plain", data="+/+/"),
            text_part("text/html", "<p>from html</p>"),
        ])
        self.assertEqual(extract_body(tree), "from html")

    def test_root_part_can_match(self):
        self.assertEqual(find_body_part(text_part("text/plain", "héllo"), "text/plain"), "héllo")

    def test_padded_payload(self):
        tree = MessagePart(mime_type="text/plain", data=base64.urlsafe_b64encode(b"padded?").decode())
        self.assertEqual(find_body_part(tree, "text/plain"), "padded?")

class TestExtractBody(unittest.TestCase):
    def test_prefers_plain_over_earlier_html(self):
        tree = MessagePart(mime_type="multipart/alternative", parts=[
            text_part("text/html", "<p>HTML first</p>"),
            text_part("text/plain", "Plain  text\n\n\n\nkept as is"),
        ])
        self.assertEqual(extract_body(tree), "Plain  text\n\n\n\nkept as is")

    def test_html_fallback_is_normalized(self):
        tree = MessagePart(mime_type="multipart/alternative", parts=[
            text_part("text/html", "<p>Hello from <b>HTML</b></p><p>Bye&nbsp;now</p>"),
        ])
        self.assertEqual(extract_body(tree), "Hello from HTML\n\nBye now")

    def test_no_text_parts(self):
        tree = MessagePart(mime_type="multipart/mixed", parts=[
            attachment("A1", "photo.png", "image/png", 10),
        ])
        self.assertEqual(extract_body(tree), "")

    def test_missing_tree(self):
        self.assertEqual(extract_body(None), "")

class TestAttachments(unittest.TestCase):
    def setUp(self):
        self.tree = MessagePart(mime_type="multipart/mixed", parts=[
            text_part("text/plain", "See attached"),
            MessagePart(mime_type="multipart/related", parts=[
                MessagePart(mime_type="multipart/alternative", parts=[
                    attachment("DEEP", "logo.png", "image/png", 512),
                ]),
            ]),
            attachment("TOP", "report.pdf", "application/pdf", 2048),
            attachment("TOP2", "notes.pdf", "application/pdf", 99),
        ])

    def test_pre_order_nesting_order(self):
        atts = extract_attachments(self.tree)
        self.assertEqual([a.attachment_id for a in atts], ["DEEP", "TOP", "TOP2"])
        self.assertEqual(atts[0], Attachment(attachment_id="DEEP", filename="logo.png", mime_type="image/png", size=512))

    def test_two_nested_attachments(self):
        tree = MessagePart(mime_type="multipart/mixed", parts=[
            text_part("text/plain", "body"),
            MessagePart(mime_type="multipart/mixed", parts=[
                attachment("ONE", "a.txt", "text/plain", 1),
                MessagePart(mime_type="multipart/mixed", parts=[
                    attachment("TWO", "b.txt", "text/plain", 2),
                ]),
            ]),
        ])
        self.assertEqual([a.attachment_id for a in extract_attachments(tree)], ["ONE", "TWO"])

    def test_metadata_is_not_defaulted(self):
        tree = MessagePart(mime_type="multipart/mixed", parts=[MessagePart(attachment_id="X")])
        att = extract_attachments(tree)[0]
        self.assertEqual(att.filename, "")
        self.assertEqual(att.mime_type, "")
        self.assertIsNone(att.size)

    def test_no_attachments(self):
        tree = MessagePart(mime_type="multipart/alternative", parts=[text_part("text/plain", "x")])
        self.assertEqual(extract_attachments(tree), [])
        self.assertEqual(extract_attachments(None), [])

    def test_find_by_id(self):
        att = find_attachment_part(self.tree, "TOP2")
        self.assertEqual(att.filename, "notes.pdf")
        self.assertEqual(att.size, 99)

    def test_find_missing_id(self):
        self.assertIsNone(find_attachment_part(self.tree, "NOPE"))
        self.assertIsNone(find_attachment_part(None, "TOP"))

class TestIterParts(unittest.TestCase):
    def test_order(self):
        tree = MessagePart(mime_type="a", parts=[
            MessagePart(mime_type="b", parts=[MessagePart(mime_type="c")]),
            MessagePart(mime_type="d"),
        ])
        self.assertEqual([p.mime_type for p in iter_parts(tree)], ["a", "b", "c", "d"])

    def test_from_api(self):
        tree = MessagePart.from_api({
            "mimeType": "multipart/mixed",
            "headers": [{"name": "Subject", "value": "x"}],
            "body": {"size": 0},
            "parts": [
                {"mimeType": "text/plain", "filename": "", "body": {"data": b64url(b"hi"), "size": 2}},
                {"mimeType": "application/pdf", "filename": "c.pdf", "body": {"attachmentId": "ATT", "size": 1234}},
            ],
        })
        self.assertEqual(tree.headers, {"Subject": "x"})
        self.assertIsNone(tree.data)
        self.assertEqual(tree.parts[1].attachment_id, "ATT")
        self.assertEqual(tree.parts[1].size, 1234)
        self.assertEqual(extract_body(tree), "hi")

if __name__ == "__main__":
    unittest.main()
