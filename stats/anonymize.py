#!/usr/bin/python
# coding=utf-8
#
# Anonymize a raw validation log: each domain name is replaced by its
# public suffix, e.g. "www.example.co.uk" becomes "co.uk", and the record
# keeps a flag telling whether the original name was below that suffix.
#
# Records written to "<log>.anon" are in the anonymized format. Records
# whose name cannot be parsed, or that do not match any suffix, are copied
# unchanged to "<log>.failed".

import dnsname
import fileprogress
import wirecodec

anon_suffix = "anon"
failed_suffix = "failed"

def anonymize_domain(wire, ps):
    # Returns (is_subdomain, suffix labels), or None if the name cannot be
    # anonymized.
    try:
        labels = dnsname.parse_labels(wire)
    except dnsname.name_error:
        return None
    return ps.match(labels)

class anonymizer:
    def __init__(self, ps):
        self.ps = ps
        self.nb_records = 0
        self.nb_success = 0
        self.nb_failed = 0

    def anonymize_record(self, record, f_success, f_failed):
        self.nb_records += 1
        result = anonymize_domain(record.domain, self.ps)
        if result is None:
            self.nb_failed += 1
            f_failed.write(record.to_bytes())
        else:
            is_subdomain, suffix = result
            self.nb_success += 1
            f_success.write(wirecodec.encode_record(record.header, is_subdomain, dnsname.render_labels(suffix)))

    def anonymize_file(self, log_file, show_progress=False):
        with open(log_file + "." + anon_suffix, "wb") as f_success:
            with open(log_file + "." + failed_suffix, "wb") as f_failed:
                def read_one(stream, index):
                    nb_bytes, record = wirecodec.read_record(stream, index, wirecodec.format_raw)
                    if record is not None:
                        self.anonymize_record(record, f_success, f_failed)
                    return nb_bytes
                return fileprogress.read_file_with_progress(log_file, read_one, show_progress)
