"""A small printf-style formatter understanding %d, %u, %x, %p, %s and %%."""

_DIGITS = "0123456789ABCDEF"
_BASES = {"d": (10, True), "u": (10, False), "x": (16, False)}
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _int32(value):
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def _digits(value, base):
    out = []
    while True:
        out.append(_DIGITS[value % base])
        value //= base
        if value == 0:
            return "".join(reversed(out))


def _integer(value, base, signed):
    value = _int32(value)
    if signed and value < 0:
        return "-" + _digits(-value, base)
    return _digits(value & _MASK32, base)


def _conversion(fmt, i):
    """Return the integer conversion starting at ``fmt[i]`` and its length, or None."""
    for prefix in ("", "l", "ll"):
        end = i + len(prefix)
        if fmt.startswith(prefix, i) and end < len(fmt) and fmt[end] in _BASES:
            return fmt[end], len(prefix) + 1
    return None


def format_xv6(fmt, *args):
    """Format ``args`` according to ``fmt`` and return the text.

    Integers are printed as 32-bit values, hexadecimal in upper case;
    ``%p`` prints a 64-bit value as sixteen hex digits. Unknown
    sequences are kept as written.
    """
    values = iter(args)

    def take():
        try:
            return next(values)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    pieces = []
    i = 0
    while i < len(fmt):
        char = fmt[i]
        if char != "%":
            pieces.append(char)
            i += 1
            continue
        i += 1
        if i >= len(fmt):
            break
        conversion = _conversion(fmt, i)
        char = fmt[i]
        if conversion is not None:
            kind, length = conversion
            base, signed = _BASES[kind]
            pieces.append(_integer(take(), base, signed))
            i += length
            continue
        if char == "p":
            pieces.append("0x" + f"{take() & _MASK64:016X}")
        elif char == "s":
            text = take()
            pieces.append("(null)" if text is None else str(text))
        elif char == "%":
            pieces.append("%")
        else:
            pieces.append("%" + char)
        i += 1
    return "".join(pieces)