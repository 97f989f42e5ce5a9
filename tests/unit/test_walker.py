# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.


import unittest
from dataclasses import replace

from slipmark.core.errors import IndentOverflow, RenderError
from slipmark.core.model import (
    Blockquote,
    CodeBlock,
    Document,
    Heading,
    InlineCode,
    ListBlock,
    Paragraph,
    StyleSpan,
    Text,
    ThematicBreak,
)
from slipmark.core.style import StyleDelta
from slipmark.escpos.commands import (
    Color,
    Cut,
    CutMode,
    Initialize,
    Justification,
    LineFeed,
    PrintText,
    RasterImage,
    SelectCodePage,
    SetColor,
    SetJustification,
    SetStyle,
)
from tests.test_support import (
    StubBarcodeGenerator,
    StubImageDecoder,
    StubQrGenerator,
    gray_image,
    make_config,
    make_walker,
    rgb_image,
)


def _para(text: str) -> Paragraph:
    return Paragraph((Text(text),))


def _printed(commands) -> list[bytes]:
    return [command.data for command in commands if isinstance(command, PrintText)]


class TestBasicBlocks(unittest.TestCase):
    def test_heading_is_centered_and_restored(self) -> None:
        commands = make_walker().render_blocks([Heading(1, (Text("Title"),))])
        self.assertEqual(
            commands,
            [
                SetStyle(bold=True, underline=True, width=2, height=2),
                SetJustification(Justification.CENTER),
                PrintText(b"Title"),
                LineFeed(1),
                SetStyle(),
                SetJustification(Justification.LEFT),
            ],
        )

    def test_bold_span_in_paragraph(self) -> None:
        block = Paragraph((StyleSpan(StyleDelta.BOLD, (Text("bold"),)), Text(" text")))
        commands = make_walker().render_blocks([block])
        self.assertEqual(
            commands,
            [
                SetStyle(bold=True),
                PrintText(b"bold"),
                SetStyle(),
                PrintText(b" text"),
                LineFeed(1),
            ],
        )

    def test_thematic_break_cuts(self) -> None:
        commands = make_walker().render_blocks([ThematicBreak()])
        self.assertEqual(commands, [PrintText(b"-" * 42), Cut(CutMode.PARTIAL)])

    def test_bitmap_block_is_centered(self) -> None:
        commands = make_walker().render_blocks([CodeBlock("bitmap", (), "#")])
        self.assertEqual(
            commands,
            [
                SetJustification(Justification.CENTER),
                RasterImage(width=1, height=1, data=b"\x80"),
                SetJustification(Justification.LEFT),
            ],
        )

    def test_inline_code_uses_accent(self) -> None:
        block = Paragraph((Text("run "), InlineCode("ls")))
        commands = make_walker().render_blocks([block])
        self.assertEqual(
            commands,
            [
                PrintText(b"run "),
                SetColor(Color.ACCENT),
                PrintText(b"ls"),
                LineFeed(1),
                SetColor(Color.DEFAULT),
            ],
        )

    def test_double_width_heading_wraps_at_half_columns(self) -> None:
        config = make_config(columns=10)
        commands = make_walker(config).render_blocks([Heading(1, (Text("abcdefghij"),))])
        self.assertEqual(_printed(commands), [b"abcde", b"fghij"])

    def test_unencodable_text_is_replaced(self) -> None:
        commands = make_walker().render_blocks([_para("snow ☃")])
        self.assertEqual(_printed(commands), [b"snow ?"])

    def test_tab_in_paragraph_prints_as_space(self) -> None:
        commands = make_walker().render_blocks([_para("qty\t2")])
        self.assertEqual(_printed(commands), [b"qty 2"])


class TestSeparators(unittest.TestCase):
    def test_one_line_feed_between_blocks(self) -> None:
        commands = make_walker().render_blocks([_para("a"), _para("b")])
        self.assertEqual(
            commands,
            [PrintText(b"a"), LineFeed(1), LineFeed(1), PrintText(b"b"), LineFeed(1)],
        )

    def test_no_separator_after_cut(self) -> None:
        commands = make_walker().render_blocks([_para("a"), ThematicBreak(), _para("b")])
        self.assertEqual(
            commands,
            [
                PrintText(b"a"),
                LineFeed(1),
                LineFeed(1),
                PrintText(b"-" * 42),
                Cut(CutMode.PARTIAL),
                PrintText(b"b"),
                LineFeed(1),
            ],
        )

    def test_tight_list_has_no_separators(self) -> None:
        block = ListBlock(ordered=False, items=((_para("a"),), (_para("b"),)))
        commands = make_walker().render_blocks([block])
        self.assertEqual(
            commands,
            [PrintText(b"- a"), LineFeed(1), PrintText(b"- b"), LineFeed(1)],
        )

    def test_loose_list_separates_items_once(self) -> None:
        block = ListBlock(ordered=False, items=((_para("a"),), (_para("b"),)), tight=False)
        commands = make_walker().render_blocks([block])
        self.assertEqual(
            commands,
            [PrintText(b"- a"), LineFeed(1), LineFeed(1), PrintText(b"- b"), LineFeed(1)],
        )


class TestLists(unittest.TestCase):
    def test_numbering_starts_and_increments(self) -> None:
        block = ListBlock(ordered=True, items=((_para("a"),), (_para("b"),)), start=3)
        commands = make_walker().render_blocks([block])
        self.assertEqual(_printed(commands), [b"3. a", b"4. b"])

    def test_numbering_resets_per_list(self) -> None:
        first = ListBlock(ordered=True, items=((_para("a"),), (_para("b"),)))
        second = ListBlock(ordered=True, items=((_para("c"),),))
        commands = make_walker().render_blocks([first, second])
        self.assertEqual(_printed(commands), [b"1. a", b"2. b", b"1. c"])

    def test_nested_list_indents_under_marker(self) -> None:
        inner = ListBlock(ordered=True, items=((_para("x"),), (_para("y"),)))
        outer = ListBlock(ordered=True, items=((_para("one"), inner), (_para("two"),)))
        commands = make_walker().render_blocks([outer])
        self.assertEqual(
            _printed(commands),
            [b"1. one", b"   1. x", b"   2. y", b"2. two"],
        )

    def test_wrapped_item_continues_under_text(self) -> None:
        config = make_config(columns=10)
        block = ListBlock(ordered=False, items=((_para("aaa bbb ccc"),),))
        commands = make_walker(config).render_blocks([block])
        self.assertEqual(_printed(commands), [b"- aaa bbb", b"  ccc"])

    def test_deep_ordered_lists_fall_back_to_bullets(self) -> None:
        config = make_config()
        config = replace(config, layout=replace(config.layout, max_ordered_depth=1))
        inner = ListBlock(ordered=True, items=((_para("x"),),))
        outer = ListBlock(ordered=True, items=((_para("one"), inner),))
        commands = make_walker(config).render_blocks([outer])
        self.assertEqual(_printed(commands), [b"1. one", b"   - x"])

    def test_empty_item_prints_marker(self) -> None:
        block = ListBlock(ordered=False, items=((),))
        commands = make_walker().render_blocks([block])
        self.assertEqual(commands, [PrintText(b"-"), LineFeed(1)])

    def test_marker_gets_own_line_before_raster(self) -> None:
        block = ListBlock(ordered=False, items=((CodeBlock("bitmap", (), "#"),),))
        commands = make_walker().render_blocks([block])
        self.assertEqual(
            commands,
            [
                PrintText(b"-"),
                LineFeed(1),
                SetJustification(Justification.CENTER),
                RasterImage(width=1, height=1, data=b"\x80"),
                SetJustification(Justification.LEFT),
            ],
        )


class TestBlockquotes(unittest.TestCase):
    def test_blockquote_indents(self) -> None:
        commands = make_walker().render_blocks([Blockquote((_para("quoted"),))])
        self.assertEqual(commands, [PrintText(b"    quoted"), LineFeed(1)])

    def test_blockquote_wraps_inside_indent(self) -> None:
        config = make_config(columns=10)
        commands = make_walker(config).render_blocks([Blockquote((_para("aaa bbb ccc"),))])
        self.assertEqual(_printed(commands), [b"    aaa", b"    bbb", b"    ccc"])

    def test_indent_overflow_reports_completed_blocks(self) -> None:
        config = make_config(columns=8)
        nested = Blockquote((Blockquote((_para("deep"),)),))
        with self.assertRaises(RenderError) as caught:
            make_walker(config).render_blocks([_para("ok"), nested])
        error = caught.exception
        self.assertEqual(error.block_index, 1)
        self.assertEqual(error.block_kind, "blockquote")
        self.assertIsInstance(error.cause, IndentOverflow)
        self.assertEqual(error.completed, (PrintText(b"ok"), LineFeed(1)))


class TestCodeBlocks(unittest.TestCase):
    def test_text_block_prints_in_accent(self) -> None:
        commands = make_walker().render_blocks([CodeBlock("text", (), "code\n")])
        self.assertEqual(
            commands,
            [
                SetColor(Color.ACCENT),
                PrintText(b"code"),
                LineFeed(1),
                SetColor(Color.DEFAULT),
            ],
        )

    def test_text_block_keywords(self) -> None:
        commands = make_walker().render_blocks([CodeBlock("text", ("center", "black"), "hi")])
        self.assertEqual(
            commands,
            [
                SetJustification(Justification.CENTER),
                PrintText(b"hi"),
                LineFeed(1),
                SetJustification(Justification.LEFT),
            ],
        )

    def test_unknown_language_prints_plain(self) -> None:
        commands = make_walker().render_blocks([CodeBlock("python", (), "x = 1")])
        self.assertEqual(commands, [PrintText(b"x = 1"), LineFeed(1)])

    def test_literal_lines_are_kept(self) -> None:
        commands = make_walker().render_blocks([CodeBlock("python", (), "a\n\tb")])
        self.assertEqual(_printed(commands), [b"a", b"        b"])

    def test_qrcode_block(self) -> None:
        qr = StubQrGenerator()
        commands = make_walker(qr=qr).render_blocks([CodeBlock("qrcode", (), "hello")])
        self.assertEqual(qr.calls, [(b"hello", "L", 4)])
        (image,) = [c for c in commands if isinstance(c, RasterImage)]
        self.assertEqual((image.width, image.height), (4, 4))

    def test_bold_qrcode_uses_larger_modules(self) -> None:
        commands = make_walker().render_blocks([CodeBlock("qrcode", ("bold",), "hello")])
        (image,) = [c for c in commands if isinstance(c, RasterImage)]
        self.assertEqual((image.width, image.height), (6, 6))

    def test_base64_qrcode_payload(self) -> None:
        qr = StubQrGenerator()
        make_walker(qr=qr).render_blocks([CodeBlock("qrcode", ("base64",), "aGVs\nbG8=")])
        self.assertEqual(qr.calls[0][0], b"hello")

    def test_invalid_base64_is_a_render_error(self) -> None:
        with self.assertRaises(RenderError) as caught:
            make_walker().render_blocks([CodeBlock("qrcode", ("base64",), "not base64!")])
        self.assertIsInstance(caught.exception.cause, ValueError)

    def test_code128_block(self) -> None:
        barcode = StubBarcodeGenerator()
        commands = make_walker(barcode=barcode).render_blocks(
            [CodeBlock("code128", (), "  ABC \n")]
        )
        self.assertEqual(barcode.calls, ["ABC"])
        (image,) = [c for c in commands if isinstance(c, RasterImage)]
        self.assertEqual((image.width, image.height), (8, 48))

    def test_image_payload_gets_trailing_newline(self) -> None:
        images = StubImageDecoder()
        make_walker(images=images).render_blocks([CodeBlock("image", (), "P1\n2 2\n1 0\n0 1")])
        self.assertEqual(images.calls, [b"P1\n2 2\n1 0\n0 1\n"])

    def test_image_dither_follows_config(self) -> None:
        images = StubImageDecoder(gray_image([[100] * 8 for _ in range(4)]))
        config = make_config()
        flat = replace(config, image=replace(config.image, dither=False))
        cases = ((flat, {True}), (config, {True, False}))
        for cfg, expected in cases:
            with self.subTest(dither=cfg.image.dither):
                commands = make_walker(cfg, images=images).render_blocks(
                    [CodeBlock("image", (), "data")]
                )
                (image,) = [c for c in commands if isinstance(c, RasterImage)]
                self.assertEqual({value for row in image.rows() for value in row}, expected)

    def test_bicolor_image_brackets_accent_plane(self) -> None:
        images = StubImageDecoder(rgb_image([[(0, 0, 0), (255, 0, 0)]]))
        commands = make_walker(images=images).render_blocks(
            [CodeBlock("image", ("bicolor",), "data")]
        )
        self.assertEqual(
            commands,
            [
                SetJustification(Justification.CENTER),
                RasterImage(width=2, height=1, data=b"\x80", plane=Color.DEFAULT),
                SetColor(Color.ACCENT),
                RasterImage(width=2, height=1, data=b"\x40", plane=Color.ACCENT),
                SetJustification(Justification.LEFT),
                SetColor(Color.DEFAULT),
            ],
        )

    def test_accent_raster(self) -> None:
        commands = make_walker().render_blocks([CodeBlock("bitmap", ("red",), "#")])
        self.assertEqual(
            commands,
            [
                SetJustification(Justification.CENTER),
                SetColor(Color.ACCENT),
                RasterImage(width=1, height=1, data=b"\x80", plane=Color.ACCENT),
                SetJustification(Justification.LEFT),
                SetColor(Color.DEFAULT),
            ],
        )

    def test_too_wide_bitmap_is_a_render_error(self) -> None:
        config = make_config(dot_width=8)
        with self.assertRaises(RenderError) as caught:
            make_walker(config).render_blocks([CodeBlock("bitmap", (), "#" * 9)])
        self.assertEqual(caught.exception.block_kind, "bitmap block")


class TestFullStream(unittest.TestCase):
    def test_prologue_and_trailer(self) -> None:
        commands = make_walker().render(Document((_para("hi"),)))
        self.assertEqual(
            commands,
            [
                Initialize(),
                SelectCodePage(0),
                PrintText(b"hi"),
                LineFeed(1),
                LineFeed(4),
                Cut(CutMode.PARTIAL),
            ],
        )

    def test_no_second_cut_after_break(self) -> None:
        commands = make_walker().render(Document((ThematicBreak(),)))
        self.assertEqual(commands[-2:], [Cut(CutMode.PARTIAL), LineFeed(4)])

    def test_trailer_follows_config(self) -> None:
        config = make_config(cut_at_end=False, trailing_feed_lines=2)
        commands = make_walker(config).render(Document((_para("hi"),)))
        self.assertEqual(commands[-1], LineFeed(2))
        self.assertNotIn(Cut(CutMode.PARTIAL), commands)

    def test_empty_document(self) -> None:
        commands = make_walker().render(Document())
        self.assertEqual(
            commands,
            [Initialize(), SelectCodePage(0), LineFeed(4), Cut(CutMode.PARTIAL)],
        )


if __name__ == "__main__":
    unittest.main()
