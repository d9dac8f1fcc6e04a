#!/usr/bin/python
# coding=utf-8
#
# Load the query load export of the resolver: a CSV file with a header line
# and one line per sample, "time,cache hits,cache misses". The counters are
# either plain numbers or thousands written as "1.2 K".

import pandas as pd

time_format = "%Y-%m-%d %H:%M:%S"

class cache_stat:
    def __init__(self, time, cache_hits, cache_misses):
        self.time = time
        self.cache_hits = cache_hits
        self.cache_misses = cache_misses

def parse_number(number):
    n = number.strip()
    try:
        if not "K" in n:
            return float(n)
        digits = n.split(" ")[0]
        if len(digits) < 2 or digits[1] != ".":
            raise ValueError("unexpected thousands format")
        return float(digits) * 1000
    except ValueError as e:
        raise ValueError("Could not parse number: " + number) from e

def parse_query_load(csv_file):
    try:
        df = pd.read_csv(csv_file, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except pd.errors.ParserError as e:
        raise ValueError("Invalid line in " + csv_file + ": " + str(e)) from e
    if len(df.columns) != 3:
        raise ValueError("Expected 3 columns in " + csv_file + ", got " + str(len(df.columns)))
    cache_stat_list = []
    for row in df.itertuples(index=False):
        for value in row:
            if not isinstance(value, str) or value == "":
                raise ValueError("Invalid line: '" + ",".join(str(v) for v in row) + "'")
        time = pd.to_datetime(row[0].strip(), format=time_format)
        cache_stat_list.append(cache_stat(time, parse_number(row[1]), parse_number(row[2])))
    return cache_stat_list

def summarize(cache_stat_list):
    hits = 0.0
    misses = 0.0
    for cs in cache_stat_list:
        hits += cs.cache_hits
        misses += cs.cache_misses
    ratio = 0.0
    if hits + misses > 0:
        ratio = hits / (hits + misses)
    return hits, misses, ratio
