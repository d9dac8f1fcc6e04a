#!/usr/bin/python
# coding=utf-8
#
# Build names and validation log records for the unit tests.

import dnsname
import wirecodec

def text_to_labels(name):
    n = name
    while n.endswith("."):
        n = n[:-1]
    if n == "":
        return (b"",)
    return tuple(p.encode("utf-8") for p in n.split(".")) + (b"",)

def name_wire(name):
    return dnsname.render_labels(text_to_labels(name))

def encode_raw_record(timestamp, algorithm, validated_flag, domain, reserved=0):
    # Record in the resolver format
    data = bytearray(timestamp.to_bytes(4, "little"))
    data.append(reserved)
    data.append(algorithm)
    data.append(validated_flag)
    data.append(len(domain))
    data += domain
    data.append(wirecodec.record_terminator)
    return bytes(data)

def encode_anon_record(timestamp, domain, sub_flag, validated_flag=1, algorithm=13):
    header = timestamp.to_bytes(4, "little") + bytes([0, algorithm, validated_flag])
    return wirecodec.encode_record(header, sub_flag != 0, domain)

def write_log(tmp_path, file_name, records):
    log_file = tmp_path / file_name
    log_file.write_bytes(b"".join(records))
    return str(log_file)

def test_text_to_labels():
    assert text_to_labels("example.co.uk.") == (b"example", b"co", b"uk", b"")
    assert text_to_labels("") == (b"",)
    assert dnsname.labels_to_text(text_to_labels("example.co.uk")) == "example.co.uk"
