import unittest

from contrail_anon.anonymise.codec import decode_line, encode_line, quote, unquote
from contrail_anon.common.dto import Record
from contrail_anon.common.exceptions import ParseError

KEY_HEX = "0x" + b"virtual_network".hex()
COLUMN_HEX = "0x" + b"prop:display_name".hex()


class DecodeLineUnitTest(unittest.TestCase):
    def test_quoted_json_value(self):
        record = decode_line(KEY_HEX + "," + COLUMN_HEX + r',"{\"a\": [1, \"b,c\"]}"')
        self.assertEqual(b"virtual_network", record.key)
        self.assertEqual(b"prop:display_name", record.column)
        self.assertEqual({"a": [1, "b,c"]}, record.value)

    def test_quoted_string_value(self):
        record = decode_line(KEY_HEX + "," + COLUMN_HEX + r',"\"Alice\""')
        self.assertEqual("Alice", record.value)

    def test_unquoted_literals(self):
        self.assertIsNone(decode_line(KEY_HEX + "," + COLUMN_HEX + ",null").value)
        self.assertIs(True, decode_line(KEY_HEX + "," + COLUMN_HEX + ",true").value)
        self.assertEqual(42, decode_line(KEY_HEX + "," + COLUMN_HEX + ",42").value)
        self.assertEqual({}, decode_line(KEY_HEX + "," + COLUMN_HEX + ",{}").value)

    def test_empty_key_and_column(self):
        record = decode_line("0x,0x,null")
        self.assertEqual(b"", record.key)
        self.assertEqual(b"", record.column)

    def test_uppercase_hex(self):
        self.assertEqual(b"\xab", decode_line("0xAB,0x00,null").key)

    def test_errors(self):
        lines = [
            "",
            "0x00,0x00",
            "0xzz,0x00,null",
            "0xabc,0x00,null",
            "0x00,0xg0,null",
            "0x00,0x00,",
            '0x00,0x00,"{"',
            '0x00,0x00,"\\"a\\""b"',
            '0x00,0x00,"\\q"',
            '0x00,0x00,"\\ud800"',
            "0x00,0x00,nope",
            "0x00,0x00,NaN",
            "0x00,0x00,Infinity",
            "0x00,0x00,-Infinity",
            r'0x00,0x00,"[1, NaN]"',
        ]
        for line in lines:
            with self.subTest(line=line):
                with self.assertRaises(ParseError):
                    decode_line(line)


class EncodeLineUnitTest(unittest.TestCase):
    def test_encode(self):
        record = Record(key=b"\x01\xab", column=b"fq_name", value=["default-domain", "proj1"])
        self.assertEqual(
            r'0x01ab,0x66715f6e616d65,"[\"default-domain\",\"proj1\"]"',
            encode_line(record),
        )

    def test_object_keys_are_sorted(self):
        record = Record(key=b"", column=b"", value={"b": 1, "a": "x"})
        self.assertEqual(r'0x,0x,"{\"a\":\"x\",\"b\":1}"', encode_line(record))

    def test_empty_object_and_null_are_bare_null(self):
        self.assertEqual("0x00,0x00,null", encode_line(Record(key=b"\x00", column=b"\x00", value={})))
        self.assertEqual("0x00,0x00,null", encode_line(Record(key=b"\x00", column=b"\x00", value=None)))

    def test_empty_list_is_quoted(self):
        self.assertEqual('0x00,0x00,"[]"', encode_line(Record(key=b"\x00", column=b"\x00", value=[])))

    def test_round_trip(self):
        lines = [
            KEY_HEX + "," + COLUMN_HEX + r',"\"Alice\""',
            KEY_HEX + "," + COLUMN_HEX + r',"{\"a\": [1, \"b,c\"], \"c\": {\"d\": null}}"',
            KEY_HEX + "," + COLUMN_HEX + ",null",
            KEY_HEX + "," + COLUMN_HEX + r',"\"caf\u00e9 \\n\""',
            "0x,0x,1.5",
            r'0x,0x,"\"\\ud800\""',
        ]
        for line in lines:
            with self.subTest(line=line):
                record = decode_line(line)
                self.assertEqual(record, decode_line(encode_line(record)))


class QuoteUnitTest(unittest.TestCase):
    def test_quote(self):
        self.assertEqual(r'"a\"b\\c"', quote('a"b\\c'))
        self.assertEqual(r'"a\nb\tc"', quote("a\nb\tc"))
        self.assertEqual(r'"\x01\x7f"', quote("\x01\x7f"))
        self.assertEqual('"café ☃"', quote("café ☃"))
        self.assertEqual(r'"\u00a0"', quote("\u00a0"))

    def test_unquote(self):
        self.assertEqual("AAé😀", unquote(r'"\x41\101\u00e9\U0001F600"'))
        self.assertEqual('a"b\\c\n', unquote(r'"a\"b\\c\n"'))
        self.assertEqual("café", unquote('"café"'))

    def test_unquote_bytes_escapes(self):
        self.assertEqual("é", unquote(r'"\xc3\xa9"'))

    def test_unquote_errors(self):
        for literal in ("", '"', "abc", '"abc', '"a\nb"', r'"\x4"', r'"\400"', '"\\"'):
            with self.subTest(literal=literal):
                with self.assertRaises(ParseError):
                    unquote(literal)

    def test_quote_unquote(self):
        for text in ("", "plain", 'quote " and \\ back', "ctrl \x00\x1b\x7f", "tab\tnl\n", "é ☃ 😀"):
            with self.subTest(text=text):
                self.assertEqual(text, unquote(quote(text)))


class InvalidUtf8UnitTest(unittest.TestCase):
    def test_invalid_utf8_is_replaced(self):
        self.assertEqual("\ufffd", unquote(r'"\xff"'))
        record = decode_line(r'0x,0x,"\"a\xffb\""')
        self.assertEqual("a\ufffdb", record.value)
        self.assertEqual('0x,0x,"\\"a\ufffdb\\""', encode_line(record))

    def test_lone_surrogate_is_written_as_json_escape(self):
        record = decode_line(r'0x,0x,"\"\\ud800\""')
        self.assertEqual("\ud800", record.value)
        self.assertEqual(r'0x,0x,"\"\\ud800\""', encode_line(record))
