"""Bitap approximate string matching.

The matcher scans a text right to left keeping one bit vector per allowed
error count. Bit ``k`` of a vector is set when the last ``k + 1`` pattern
characters align (with that many errors) at the current position, so a set
top bit means the whole pattern starts there.

Scores combine the error rate with how far the match starts from the
expected location::

    score = errors / len(pattern) + abs(location - start) / distance

A score of 0 is an exact match at the anchor. Anything above the threshold
is not a match.
"""

from .normalize import normalize
from .options import SearchOptions
from .result import BitapResult, Span


def pattern_alphabet(pattern: str) -> dict[str, int]:
    """Bit mask per character; the first pattern character is the top bit."""
    alphabet: dict[str, int] = {}
    size = len(pattern)
    for i, char in enumerate(pattern):
        alphabet[char] = alphabet.get(char, 0) | (1 << (size - i - 1))
    return alphabet


def compute_score(
    pattern_len: int,
    errors: int,
    current_location: int,
    expected_location: int,
    distance: int,
    ignore_location: bool = False,
) -> float:
    """Score an alignment with ``errors`` errors starting at ``current_location``."""
    accuracy = errors / pattern_len
    if ignore_location:
        return accuracy
    proximity = abs(expected_location - current_location)
    if not distance:
        # No tolerance for offset at all
        return 1.0 if proximity else accuracy
    return accuracy + proximity / distance


def mask_to_indices(match_mask: list[int], min_match_char_length: int = 1) -> list[Span]:
    """Turn a per-character match mask into inclusive spans.

    Runs shorter than ``min_match_char_length`` are dropped.
    """
    indices: list[Span] = []
    start = -1
    for i, matched in enumerate(match_mask):
        if matched and start == -1:
            start = i
        elif not matched and start != -1:
            if i - start >= min_match_char_length:
                indices.append((start, i - 1))
            start = -1
    end = len(match_mask)
    if end and match_mask[-1] and end - start >= min_match_char_length:
        indices.append((start, end - 1))
    return indices


def _at(bits: list[int], index: int) -> int:
    return bits[index] if 0 <= index < len(bits) else 0


def bitap_search(
    text: str,
    pattern: str,
    alphabet: dict[str, int],
    options: SearchOptions,
) -> BitapResult:
    """Find the best approximate occurrence of ``pattern`` in ``text``.

    Both strings must already be normalized. ``pattern`` must not be empty.
    """
    pattern_len = len(pattern)
    text_len = len(text)
    expected = max(0, min(options.location, text_len))
    distance = options.distance
    ignore_location = options.ignore_location
    track_spans = options.needs_spans

    def score_at(errors: int, location: int) -> float:
        return compute_score(pattern_len, errors, location, expected, distance, ignore_location)

    threshold = options.threshold
    match_mask = [0] * text_len if track_spans else []

    # Exact occurrences from the anchor onwards tighten the threshold
    # before the approximate scan starts.
    index = text.find(pattern, expected)
    while index > -1:
        threshold = min(score_at(0, index), threshold)
        if track_spans:
            for i in range(index, index + pattern_len):
                match_mask[i] = 1
        index = text.find(pattern, index + pattern_len)

    best_location = -1
    best_score = 1.0
    last_bits: list[int] = []
    bin_max = pattern_len + text_len
    top_bit = 1 << (pattern_len - 1)
    full = (1 << pattern_len) - 1

    for errors in range(pattern_len):
        # Widest offset from the anchor that could still beat the threshold
        # with this many errors.
        bin_min = 0
        bin_mid = bin_max
        while bin_min < bin_mid:
            if score_at(errors, expected + bin_mid) <= threshold:
                bin_min = bin_mid
            else:
                bin_max = bin_mid
            bin_mid = (bin_max - bin_min) // 2 + bin_min
        bin_max = bin_mid

        start = max(1, expected - bin_mid + 1)
        if options.find_all_matches:
            finish = text_len
        else:
            finish = min(expected + bin_mid, text_len) + pattern_len

        bits = [0] * (finish + 2)
        bits[finish + 1] = (1 << errors) - 1

        j = finish
        while j >= start:
            location = j - 1
            char_match = alphabet.get(text[location], 0) if location < text_len else 0
            if track_spans and location < text_len:
                match_mask[location] = 1 if char_match else 0

            bits[j] = ((bits[j + 1] << 1) | 1) & char_match
            if errors:
                # substitution, insertion, deletion
                bits[j] |= (
                    ((_at(last_bits, j + 1) | _at(last_bits, j)) << 1) | 1 | _at(last_bits, j + 1)
                ) & full

            if bits[j] & top_bit:
                score = score_at(errors, location)
                if score <= threshold:
                    threshold = score
                    best_score = score
                    best_location = location
                    if best_location <= expected:
                        break
                    # Only positions at least as close to the anchor can win now
                    start = max(1, 2 * expected - best_location)
            j -= 1

        # One more error cannot beat what we already have
        if score_at(errors + 1, expected) > threshold:
            break
        last_bits = bits

    if best_location < 0:
        return BitapResult(is_match=False, score=1.0)

    indices: list[Span] = []
    if track_spans:
        indices = mask_to_indices(match_mask, options.min_match_char_length)
        if not indices:
            return BitapResult(is_match=False, score=1.0)

    return BitapResult(
        is_match=True,
        score=min(max(best_score, 0.0), 1.0),
        indices=tuple(indices) if options.include_matches else (),
    )


class BitapMatcher:
    """Matches one query against any number of texts.

    The query is normalized and its alphabet built once, so a matcher is
    created per search and reused for every field of every record.

    Example:
        >>> matcher = BitapMatcher("valu", SearchOptions())
        >>> matcher.search_in("value0").is_match
        True
    """

    def __init__(self, pattern: str, options: SearchOptions):
        self.options = options
        self.pattern = normalize(pattern, options.is_case_sensitive)
        self.alphabet = pattern_alphabet(self.pattern)

    def search_in(self, text: str) -> BitapResult:
        text = normalize(text, self.options.is_case_sensitive)

        if not self.pattern:
            return BitapResult(is_match=True, score=0.0)

        if text == self.pattern:
            indices = ((0, len(text) - 1),) if self.options.include_matches else ()
            return BitapResult(is_match=True, score=0.0, indices=indices)

        return bitap_search(text, self.pattern, self.alphabet, self.options)
