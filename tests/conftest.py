"""
Shared fixtures: a complete synthetic Range Series image.

The image is packed here with ``struct`` rather than with the package's own
layouts, so the decoder and encoder are checked against an independent
rendition of the wire format.

Layout (payload sizes):
    AQFT 500
      HEAD 336: sign 208, mcda 4, dbrf 8, cnst 16, hasi 4, swep 32, fbin 8
      BODY 148: rtag 4, gps1 28, indx 4, scal 16, afft 24, ifft 24
    END  0
"""
import struct

import pytest


HEAD_SIZE = 336
BODY_SIZE = 148
ROOT_SIZE = HEAD_SIZE + 8 + BODY_SIZE + 8

MCDA_STAMP = 3600000000
GPS1_STAMP = 3600000060

AFFT_VALUES = [(1.0, -0.25), (0.5, 0.0), (-3.5, 2.0)]
IFFT_VALUES = [(0.125, 0.125), (-1.0, 1.0), (8.0, -8.0)]


def fourcc(code, endian='>'):
    raw = code.encode('latin-1')
    return raw[::-1] if endian == '<' else raw


def header(code, size, endian='>'):
    return fourcc(code, endian) + struct.pack(endian + 'I', size)


def leaf(code, payload, endian='>'):
    return header(code, len(payload), endian) + payload


def text_field(text, length=64):
    raw = text if isinstance(text, bytes) else text.encode('latin-1')
    return raw.ljust(length, b'\x00')


def head_leaves(endian='>', description=b"Test file"):
    sign = (fourcc("1.00", endian) + fourcc("RSER", endian) + fourcc("XXXX", endian)
            + struct.pack(endian + 'I', 0x1f)
            + text_field(description) + text_field("Ocean Lab") + text_field("synthetic"))
    return [
        leaf("sign", sign, endian),
        leaf("mcda", struct.pack(endian + 'I', MCDA_STAMP), endian),
        leaf("dbrf", struct.pack(endian + 'd', 12.5), endian),
        leaf("cnst", struct.pack(endian + '4i', 3, 1, 512, 1), endian),
        leaf("hasi", bytes.fromhex("01020304"), endian),
        leaf("swep", struct.pack(endian + 'i3di', 2048, 4500000.0, 25000.0, 2.0, 0), endian),
        leaf("fbin", fourcc("cviq", endian) + fourcc("flt4", endian), endian),
    ]


def body_leaves(endian='>'):
    afft = struct.pack(endian + '6f', *[v for pair in AFFT_VALUES for v in pair])
    ifft = struct.pack(endian + '6f', *[v for pair in IFFT_VALUES for v in pair])
    return [
        leaf("rtag", struct.pack(endian + 'I', 42), endian),
        leaf("gps1", struct.pack(endian + '3dI', 37.25, -122.5, 10.0, GPS1_STAMP), endian),
        leaf("indx", struct.pack(endian + 'I', 7), endian),
        leaf("scal", struct.pack(endian + '2d', 0.5, -1.5), endian),
        leaf("afft", afft, endian),
        leaf("ifft", ifft, endian),
    ]


def build_image(endian='>', description=b"Test file"):
    head = b''.join(head_leaves(endian, description))
    body = b''.join(body_leaves(endian))
    return (header("AQFT", len(head) + 8 + len(body) + 8, endian)
            + header("HEAD", len(head), endian) + head
            + header("BODY", len(body), endian) + body
            + header("END ", 0, endian))


EXPECTED_TEXT = """\
AQFT

HEAD

sign
version:1.00
filetype:RSER
sitecode:XXXX
userflags:1f
description:Test file
ownername:Ocean Lab
comment:synthetic

mcda
filetimestamp:1517155200 (NB: seconds since 1970) (Sun Jan 28 16:00:00 2018)

dbrf
rxloss:12.5

cnst
nchannels:3
nranges:1
nsweeps:512
iqindicator:1

hasi
data: 01 02 03 04

swep
samplespersweep:2048
sweepstart:4500000
sweepbandwidth:25000
sweeprate:2
rangeoffset:0

fbin
format:cviq
type:flt4

BODY

rtag
rtag:42

gps1
lat:37.25
lon:-122.5
alt:10
gpstimestamp:1517155260 (NB: seconds since 1970) (Sun Jan 28 16:01:00 2018)

indx
index:7

scal
scalar_one:0.5
scalar_two:-1.5

afft
  0  1.000000000e+00 -2.500000000e-01
  1  5.000000000e-01  0.000000000e+00
  2 -3.500000000e+00  2.000000000e+00

ifft
  0  1.250000000e-01  1.250000000e-01
  1 -1.000000000e+00  1.000000000e+00
  2  8.000000000e+00 -8.000000000e+00

""" + "END \n\n"


@pytest.fixture
def rs_bytes():
    """Big-endian image of a complete Range Series file."""
    return build_image('>')


@pytest.fixture
def rs_bytes_le():
    """The same file written with little-endian words."""
    return build_image('<')


@pytest.fixture
def rs_text():
    """Text rendering of ``rs_bytes``."""
    return EXPECTED_TEXT
