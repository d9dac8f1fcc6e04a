#!/usr/bin/python
# coding=utf-8
#
# Binary records of the DNSSEC validation log.
#
# Each record is a fixed header, a domain name in DNS wire format, and a
# newline byte. There are two layouts:
#
# raw format, as written by the resolver, 8 bytes header:
#     0-3  timestamp, little endian
#     4    reserved
#     5    DNSSEC algorithm number
#     6    validation result, 1 if the validation succeeded
#     7    length of the domain name
#
# anonymized format, as written by the anonymizer, 9 bytes header:
#     0-6  same as the raw format
#     7    subdomain flag, 1 if the original name was below its suffix
#     8    length of the domain name
#
# A record that cannot be read completely, or that is not followed by a
# newline, means that we lost the framing of the stream. There is no way to
# resynchronize, so this is reported as stream_desync and the run stops.

format_raw = 0
format_anonymized = 1

validation_success = 1
record_terminator = 0x0A

header_length = { format_raw: 8, format_anonymized: 9 }

class stream_desync(Exception):
    def __init__(self, index, message):
        super().__init__(message + " at " + str(index))
        self.index = index

class log_record:
    def __init__(self, record_format, header, domain):
        self.record_format = record_format
        self.header = bytes(header)
        self.domain = bytes(domain)
        self.timestamp = int.from_bytes(self.header[0:4], "little")
        self.algorithm = self.header[5]
        self.validated = self.header[6] == validation_success
        if record_format == format_anonymized:
            self.sub_flag = self.header[7]
        else:
            self.sub_flag = None

    @property
    def is_subdomain(self):
        # Meaning used by the anonymizer: the stored suffix had more labels
        # in front of it in the original name.
        if self.sub_flag is None:
            return None
        return self.sub_flag != 0

    @property
    def legacy_sub(self):
        # Meaning used by the first version of the analysis, which tested
        # the flag against zero. Kept under its own name; the two readings
        # are opposite for the same byte.
        if self.sub_flag is None:
            return None
        return self.sub_flag == 0

    def to_bytes(self):
        return self.header + self.domain + bytes([record_terminator])

def read_exactly(stream, nb_bytes):
    data = stream.read(nb_bytes)
    if data is None:
        data = b""
    return data

def read_record(stream, index, record_format=format_anonymized):
    h_len = header_length[record_format]
    header = read_exactly(stream, h_len)
    if len(header) == 0:
        return 0, None
    if len(header) < h_len:
        raise stream_desync(index, "Truncated header, " + str(len(header)) + " bytes")
    length = header[h_len - 1]
    domain = read_exactly(stream, length)
    if len(domain) < length:
        raise stream_desync(index, "Truncated domain, " + str(len(domain)) + " of " + str(length) + " bytes")
    terminator = read_exactly(stream, 1)
    if len(terminator) != 1 or terminator[0] != record_terminator:
        raise stream_desync(index, "No newline")
    return h_len + length + 1, log_record(record_format, header, domain)

def encode_record(header7, is_subdomain, domain):
    if len(domain) > 255:
        raise ValueError("domain too long: " + str(len(domain)))
    data = bytearray(header7[0:7])
    if is_subdomain:
        data.append(1)
    else:
        data.append(0)
    data.append(len(domain))
    data += domain
    data.append(record_terminator)
    return bytes(data)
