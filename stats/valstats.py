#!/usr/bin/python
# coding=utf-8
#
# Compute validation statistics from an anonymized log: number of
# validations, number of successful validations and peak rate, globally
# and for each public suffix.

import math
import dns.dnssectypes
import dnsname
import fileprogress
import ratetracker
import wirecodec

# rate tracker key for the whole log; domain keys are strings
global_key = None

class stat_entry:
    def __init__(self):
        self.validations = 0
        self.successful_validations = 0
        self.peak = 0.0

    def add(self, record, peak):
        self.validations += 1
        if record.validated:
            self.successful_validations += 1
        self.peak = peak

def algorithm_name(algorithm):
    return dns.dnssectypes.Algorithm.to_text(algorithm)

class validation_stats:
    def __init__(self, include_subdomains=False, window=ratetracker.window_seconds):
        self.include_subdomains = include_subdomains
        self.window = window
        self.rates = ratetracker.rate_tracker(window)
        self.domains = dict()
        self.all = stat_entry()
        self.algo_count = dict()
        self.nb_records = 0
        self.domain_errors = 0
        self.not_in_order = 0
        self.first_timestamp = 0
        self.last_timestamp = 0
        self.previous_time = 0

    def check_order(self, index, timestamp):
        if index == 0:
            self.first_timestamp = timestamp
        if timestamp > self.last_timestamp:
            self.last_timestamp = timestamp
        if timestamp < self.previous_time:
            self.not_in_order += 1
        else:
            self.previous_time = timestamp

    def add_record(self, index, record):
        self.nb_records += 1
        self.check_order(index, record.timestamp)
        try:
            labels = dnsname.parse_labels(record.domain)
        except dnsname.name_error:
            self.domain_errors += 1
            return
        # The historical reading of the flag byte decides which records are
        # counted per domain: without include_subdomains, only the records
        # the anonymizer marked as below their suffix (byte 1) are counted.
        if self.include_subdomains or not record.legacy_sub:
            key = dnsname.labels_to_text(labels)
            if not key in self.domains:
                self.domains[key] = stat_entry()
            self.domains[key].add(record, self.rates.observe(key, record.timestamp))
        self.all.add(record, self.rates.observe(global_key, record.timestamp))
        if record.algorithm in self.algo_count:
            self.algo_count[record.algorithm] += 1
        else:
            self.algo_count[record.algorithm] = 1

    def load_logfile(self, log_file, show_progress=False):
        def read_one(stream, index):
            nb_bytes, record = wirecodec.read_record(stream, index, wirecodec.format_anonymized)
            if record is not None:
                self.add_record(index, record)
            return nb_bytes
        return fileprogress.read_file_with_progress(log_file, read_one, show_progress)

    def time_span(self):
        return self.last_timestamp - self.first_timestamp

    def average_rate(self):
        # Not defined when all records share the same second.
        span = self.time_span()
        if span == 0:
            return math.nan
        return self.all.validations / span

    def summary_lines(self):
        lines = [
            "Not in order: " + str(self.not_in_order),
            "Domain errors: " + str(self.domain_errors),
            "Total amount of verifications: " + str(self.all.validations),
            "Successfully validated: " + str(self.all.successful_validations),
            "First validation: " + str(self.first_timestamp),
            "Last validation: " + str(self.last_timestamp),
            "Validations per second in " + str(self.window) + " seconds: " + str(self.all.peak),
            "Average validations per second: " + str(self.average_rate())]
        for algorithm in sorted(self.algo_count.keys()):
            lines.append("Validations with " + algorithm_name(algorithm) + ": " + str(self.algo_count[algorithm]))
        return lines

    def domain_lines(self):
        lines = []
        for domain in sorted(self.domains.keys()):
            entry = self.domains[domain]
            lines.append(domain + "," + str(entry.validations) + "," + str(entry.successful_validations) + "," + str(entry.peak))
        return lines

    def export_result_file(self, result_file):
        with open(result_file, "wt", encoding="utf-8") as f:
            for line in self.summary_lines():
                f.write(line + "\n")
            for line in self.domain_lines():
                f.write(line + "\n")
