#!/usr/bin/python
# coding=utf-8
#
# Conversion between the DNS wire encoding of a name and a list of labels.
#
# A name is handled as a tuple of byte strings, from the most specific
# label to the least specific, always terminated by the empty root label:
#
#     b"\x03www\x07example\x03com\x00" <-> (b"www", b"example", b"com", b"")
#
# The parser is iterative, so a long sequence of labels cannot exhaust the
# stack.

max_label_length = 63

class name_error(Exception):
    pass

def parse_labels(wire):
    if len(wire) == 0:
        raise name_error("empty name")
    labels = []
    offset = 0
    while True:
        if offset >= len(wire):
            raise name_error("missing root label after " + str(len(labels)) + " labels")
        length = wire[offset]
        offset += 1
        if length == 0:
            if offset != len(wire):
                raise name_error(str(len(wire) - offset) + " bytes after the root label")
            labels.append(b"")
            break
        if length > max_label_length:
            raise name_error("label length " + str(length) + " at offset " + str(offset - 1))
        if offset + length > len(wire):
            raise name_error("label length " + str(length) + " exceeds the " + str(len(wire) - offset) + " remaining bytes")
        labels.append(bytes(wire[offset:offset + length]))
        offset += length
    return tuple(labels)

def render_labels(labels):
    wire = bytearray()
    for label in labels:
        if len(label) > max_label_length:
            raise name_error("label too long: " + str(len(label)))
        wire.append(len(label))
        wire += label
    return bytes(wire)

def labels_to_text(labels):
    # The root label is not part of the text form, "example.com"
    parts = labels
    if len(parts) > 0 and len(parts[-1]) == 0:
        parts = parts[:-1]
    return ".".join(p.decode("utf-8", errors="backslashreplace") for p in parts)
