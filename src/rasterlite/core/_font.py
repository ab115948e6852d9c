"""Internal 20x40 glyph bitmaps for text rendering.

This is an internal module used by ``rasterlite.core.text``.
Not intended for public use.

Glyphs are generated from a classic 5x7 dot-matrix font. Each dot becomes a
4x4 block of full coverage, giving a 20x28 ink area that sits in a 20x40
cell with its lowest row ending 6 pixels above the cell bottom.
"""

GLYPH_WIDTH = 20
GLYPH_HEIGHT = 40
FIRST_CHAR = 0x20
LAST_CHAR = 0x7E

_DOT = 4
_TOP = 6

# One entry per printable ASCII character starting at 0x20. Each entry is five
# column bytes; bit 0 is the top row.
_COLUMNS_5X7 = (
    "0000000000",  # space
    "00005f0000",  # !
    "0007000700",  # "
    "147f147f14",  # #
    "242a7f2a12",  # $
    "2313086462",  # %
    "3649552250",  # &
    "0005030000",  # '
    "001c224100",  # (
    "0041221c00",  # )
    "082a1c2a08",  # *
    "08083e0808",  # +
    "0050300000",  # ,
    "0808080808",  # -
    "0060600000",  # .
    "2010080402",  # /
    "3e5149453e",  # 0
    "00427f4000",  # 1
    "4261514946",  # 2
    "2141454b31",  # 3
    "1814127f10",  # 4
    "2745454539",  # 5
    "3c4a494930",  # 6
    "0171090503",  # 7
    "3649494936",  # 8
    "064949291e",  # 9
    "0036360000",  # :
    "0056360000",  # ;
    "0814224100",  # <
    "1414141414",  # =
    "0041221408",  # >
    "0201510906",  # ?
    "324979413e",  # @
    "7e1111117e",  # A
    "7f49494936",  # B
    "3e41414122",  # C
    "7f4141221c",  # D
    "7f49494941",  # E
    "7f09090101",  # F
    "3e41415132",  # G
    "7f0808087f",  # H
    "00417f4100",  # I
    "2040413f01",  # J
    "7f08142241",  # K
    "7f40404040",  # L
    "7f0204027f",  # M
    "7f0408107f",  # N
    "3e4141413e",  # O
    "7f09090906",  # P
    "3e4151215e",  # Q
    "7f09192946",  # R
    "4649494931",  # S
    "01017f0101",  # T
    "3f4040403f",  # U
    "1f2040201f",  # V
    "7f2018207f",  # W
    "6314081463",  # X
    "0304780403",  # Y
    "6151494543",  # Z
    "00007f4141",  # [
    "0204081020",  # backslash
    "41417f0000",  # ]
    "0402010204",  # ^
    "4040404040",  # _
    "0001020400",  # `
    "2054545478",  # a
    "7f48444438",  # b
    "3844444420",  # c
    "384444487f",  # d
    "3854545418",  # e
    "087e090102",  # f
    "081454543c",  # g
    "7f08040478",  # h
    "00447d4000",  # i
    "2040443d00",  # j
    "007f102844",  # k
    "00417f4000",  # l
    "7c04180478",  # m
    "7c08040478",  # n
    "3844444438",  # o
    "7c14141408",  # p
    "081414187c",  # q
    "7c08040408",  # r
    "4854545420",  # s
    "043f444020",  # t
    "3c4040207c",  # u
    "1c2040201c",  # v
    "3c4030403c",  # w
    "4428102844",  # x
    "0c5050503c",  # y
    "4464544c44",  # z
    "0008364100",  # {
    "00007f0000",  # |
    "0041360800",  # }
    "0804081008",  # ~
)


def _expand(columns: bytes) -> bytes:
    """Render five 7-bit columns into a 20x40 coverage bitmap."""
    cell = bytearray(GLYPH_WIDTH * GLYPH_HEIGHT)
    for col, bits in enumerate(columns):
        for row in range(7):
            if not bits & (1 << row):
                continue
            for dy in range(_DOT):
                start = (_TOP + row * _DOT + dy) * GLYPH_WIDTH + col * _DOT
                cell[start : start + _DOT] = b"\xff" * _DOT
    return bytes(cell)


GLYPHS: tuple[bytes, ...] = tuple(_expand(bytes.fromhex(h)) for h in _COLUMNS_5X7)


def glyph_for(ch: str) -> bytes:
    """Bitmap for ``ch``; characters outside printable ASCII map to '?'."""
    code = ord(ch)
    if code < FIRST_CHAR or code > LAST_CHAR:
        code = ord("?")
    return GLYPHS[code - FIRST_CHAR]
