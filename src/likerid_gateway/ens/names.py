"""ENS name handling: DNS-style wire format and LikerID name patterns."""

from dataclasses import dataclass
from typing import Optional

from likerid_gateway.core.config import PROFILE_HOSTS
from likerid_gateway.utils.exceptions import RequestDecodeError

# LikerID names look like <id>.id.like.co or <id>.id.liker.land
LIKER_ID_LABEL_COUNT = 4
LIKER_ID_SUFFIXES = tuple(PROFILE_HOSTS)

# ENS keeps the DNS length-prefix layout but allows labels up to 255 bytes
# and has no compression pointers
MAX_LABEL_LENGTH = 255


@dataclass(frozen=True)
class LikerIdName:
    """A name that matched one of the LikerID patterns."""

    liker_id: str
    suffix: str


def decode_dns_name(wire: bytes) -> str:
    """
    Decode an ENS DNS-encoded name into a dotted string.

    Each label is a length byte followed by that many bytes; a zero length
    ends the name. Labels that are not valid UTF-8 are kept with
    surrogate escapes so that the name never matches a LikerID pattern.
    Raises RequestDecodeError when a label runs past the end of the data.
    """
    labels = []
    offset = 0

    while offset < len(wire):
        length = wire[offset]
        offset += 1

        if length == 0:
            break

        if offset + length > len(wire):
            raise RequestDecodeError(
                f"Invalid DNS-encoded name: label at offset {offset - 1} is truncated"
            )

        label = wire[offset : offset + length]
        labels.append(label.decode("utf-8", "surrogateescape"))
        offset += length

    return ".".join(labels)


def encode_dns_name(name: str) -> bytes:
    """Encode a dotted name into ENS DNS wire format."""
    wire = bytearray()

    for label in name.rstrip(".").split("."):
        if not label:
            continue

        encoded = label.encode("utf-8")

        if len(encoded) > MAX_LABEL_LENGTH:
            raise ValueError(f"Cannot encode {name!r}: label longer than 255 bytes")

        wire.append(len(encoded))
        wire.extend(encoded)

    wire.append(0)
    return bytes(wire)


def _is_valid_utf8(name: str) -> bool:
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def match_liker_id(name: str) -> Optional[LikerIdName]:
    """
    Match a name against the LikerID patterns.

    Returns None unless the name is valid UTF-8, has exactly four labels and
    ends with a LikerID suffix. The suffix test is a plain string comparison.
    """
    labels = name.split(".")

    if len(labels) != LIKER_ID_LABEL_COUNT or not _is_valid_utf8(name):
        return None

    for suffix in LIKER_ID_SUFFIXES:
        if name.endswith(suffix):
            return LikerIdName(liker_id=labels[0], suffix=suffix)

    return None
