"""
Link-stream parser.

Reads Circos link lists in either of two layouts and yields one Link per
logical record:

    single-line   id chr1 start1 end1 chr2 start2 end2 [options]
                  chr1 start1 end1 chr2 start2 end2 [options]
    two-line      id chr1 start1 end1 [options]
                  id chr2 start2 end2 [options]

Two-line records are paired by read order. At most one pending endpoint is
held while waiting for its partner line.
"""

import logging
from typing import Iterable, Iterator, List, NamedTuple, Optional

from circostools.binlinks.intervals import Interval, make_interval
from circostools.exceptions import MalformedRecordError

logger = logging.getLogger(__name__)

# Lines with more tokens than this hold both endpoints
MAX_ENDPOINT_TOKENS = 5
MIN_ENDPOINT_TOKENS = 4

# Replacement character left by decoding with errors="replace"
UNDECODABLE = "\ufffd"


class Endpoint(NamedTuple):
    """One side of a link."""
    link_id: str
    chrom: str
    interval: Interval


class Link(NamedTuple):
    """A pair of endpoints; link[0] is the source, link[1] the target."""
    source: Endpoint
    target: Endpoint

    @property
    def link_id(self) -> str:
        return self.source.link_id


def _is_int(token: str) -> bool:
    try:
        int(token)
    except ValueError:
        return False
    return True


def _endpoint(link_id: str, chrom: str, start: str, end: str) -> Endpoint:
    try:
        interval = make_interval(int(start), int(end))
    except ValueError:
        raise MalformedRecordError(
            f"non-integer coordinates {start!r} {end!r} for link {link_id}"
        ) from None
    return Endpoint(link_id, chrom, interval)


def parse_endpoint_line(tokens: List[str]) -> Endpoint:
    """Parse one line of the two-line form: id chr start end [options]."""
    if len(tokens) < MIN_ENDPOINT_TOKENS:
        raise MalformedRecordError(
            f"expected at least {MIN_ENDPOINT_TOKENS} fields, got {len(tokens)}"
        )
    link_id, chrom, start, end = tokens[:4]
    return _endpoint(link_id, chrom, start, end)


def parse_link_line(tokens: List[str], lineno: int = 0) -> Link:
    """
    Parse a line holding both endpoints of a link.

    Lines with a leading link id are recognised by integer coordinates in
    fields 2-3 and 5-6; otherwise the Circos layout without an id is assumed
    and the link is named after its line number.
    """
    if len(tokens) >= 7 and all(_is_int(tokens[i]) for i in (2, 3, 5, 6)):
        link_id, chr1, start1, end1, chr2, start2, end2 = tokens[:7]
    elif len(tokens) >= 6 and all(_is_int(tokens[i]) for i in (1, 2, 4, 5)):
        chr1, start1, end1, chr2, start2, end2 = tokens[:6]
        link_id = f"line{lineno}"
    else:
        raise MalformedRecordError(f"cannot find two endpoints in {len(tokens)} fields")
    return Link(
        _endpoint(link_id, chr1, start1, end1),
        _endpoint(link_id, chr2, start2, end2),
    )


def iter_links(lines: Iterable[str]) -> Iterator[Link]:
    """
    Lazily parse links from a text stream.

    Blank lines and '#' comments are skipped. Malformed records are logged and
    skipped; a malformed partner line also discards its pending endpoint. An
    endpoint still waiting for its partner at end of stream is dropped.

    Args:
        lines: Iterable of input lines (e.g. an open file)

    Yields:
        Link records in input order
    """
    pending: Optional[Endpoint] = None
    pending_line = 0

    for lineno, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens or tokens[0].startswith("#"):
            continue

        try:
            if UNDECODABLE in line:
                raise MalformedRecordError("undecodable bytes")
            if len(tokens) > MAX_ENDPOINT_TOKENS:
                link = parse_link_line(tokens, lineno)
                if pending is not None:
                    logger.warning(
                        f"Line {pending_line}: link {pending.link_id} has no partner line, skipped"
                    )
                    pending = None
                yield link
            elif pending is None:
                pending = parse_endpoint_line(tokens)
                pending_line = lineno
            else:
                partner = parse_endpoint_line(tokens)
                if partner.link_id != pending.link_id:
                    logger.debug(
                        f"paired lines {pending_line}-{lineno} have different ids "
                        f"{pending.link_id} {partner.link_id}"
                    )
                link = Link(pending, partner)
                pending = None
                yield link
        except MalformedRecordError as e:
            logger.warning(f"Line {lineno}: skipping malformed record ({e})")
            pending = None

    if pending is not None:
        logger.debug(f"end of input with unpaired link {pending.link_id} at line {pending_line}")
