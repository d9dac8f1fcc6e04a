#!/usr/bin/python
# coding=utf-8
#
# Count the RRSIG records of zone files, per signing key, and how many of
# them are duplicates, i.e. follow an RRSIG that covers the same record
# type. Duplicates would not be needed if each RRset was signed only once.
#
# The zone files are in the tab separated format produced by zone transfers:
#
#     example.com.<tab>3600<tab>IN<tab>RRSIG<tab>A 13 2 3600 ... 12345 example.com. ...
#
# The name of the zone is the name of the file, minus the ".txt" extension.

import concurrent.futures
import os
import sys
import traceback
import dns.exception
import dns.rdata
import dns.rdataclass
import dns.rdatatype

class key_stats:
    def __init__(self):
        self.total = 1
        self.duplicates = 0

class zone_stat:
    def __init__(self, keys):
        self.keys = keys
        self.total = 0
        self.duplicates = 0
        for key_id in keys:
            self.total += keys[key_id].total
            self.duplicates += keys[key_id].duplicates
        self.necessary_signatures = self.total - self.duplicates

def parse_rrsig_line(line):
    # Returns the covered type and the key tag of an RRSIG line,
    # or None for any other line.
    parts = [p for p in line.rstrip("\n").split("\t") if p != ""]
    if len(parts) < 5 or parts[3].upper() != "RRSIG":
        return None
    try:
        rd = dns.rdata.from_text(dns.rdataclass.IN, dns.rdatatype.RRSIG, parts[4].strip())
    except (dns.exception.DNSException, ValueError):
        return None
    return dns.rdatatype.to_text(rd.type_covered), str(rd.key_tag)

def zone_name(file_name):
    zone = os.path.basename(file_name)
    if zone.endswith(".txt"):
        zone = zone[:-4]
    return zone

def count_signatures(lines):
    keys = dict()
    previous_type = None
    for line in lines:
        sig = parse_rrsig_line(line)
        if sig is None:
            previous_type = None
            continue
        signed_type, key_id = sig
        if key_id in keys:
            keys[key_id].total += 1
            if signed_type == previous_type:
                keys[key_id].duplicates += 1
        else:
            keys[key_id] = key_stats()
        previous_type = signed_type
    return keys

def analyze_zone_file(file_name):
    with open(file_name, "rt", encoding="utf-8") as f:
        keys = count_signatures(f)
    return zone_name(file_name), keys

def list_zone_files(path, only_txt=False):
    if not os.path.isdir(path):
        return [path]
    files = []
    for n in sorted(os.listdir(path)):
        file_name = os.path.join(path, n)
        if os.path.isfile(file_name) and (not only_txt or n.endswith(".txt")):
            files.append(file_name)
    return files

def analyze_zone_files(path, only_txt=False, nb_process=0):
    files = list_zone_files(path, only_txt)
    results = []
    if len(files) == 1 or nb_process == 1:
        for file_name in files:
            results.append(analyze_zone_file(file_name))
    elif len(files) > 1:
        if nb_process <= 0:
            nb_process = os.cpu_count()
        with concurrent.futures.ProcessPoolExecutor(max_workers = nb_process) as executor:
            future_to_file = {executor.submit(analyze_zone_file, file_name):file_name for file_name in files }
            for future in concurrent.futures.as_completed(future_to_file):
                file_name = future_to_file[future]
                try:
                    results.append(future.result())
                except Exception as exc:
                    traceback.print_exc()
                    print("\nZone file " + file_name + " generated an exception: " + str(exc))
                    raise
    return [(zone, zone_stat(keys)) for zone, keys in results]

def zone_report_lines(results):
    lines = ["Zone, Total, Necessary signatures, Key ID, Signatures, Already signed"]
    for zone, zs in sorted(results, key=lambda r: r[0]):
        s = zone + "," + str(zs.total) + "," + str(zs.necessary_signatures)
        for key_id, ks in sorted(zs.keys.items(), key=lambda k: k[1].total, reverse=True):
            s += "," + key_id + "," + str(ks.total) + "," + str(ks.duplicates)
        lines.append(s)
    return lines

def save_zone_report(results, report_file=None):
    lines = zone_report_lines(results)
    if report_file is None:
        for line in lines:
            sys.stdout.write(line + "\n")
    else:
        with open(report_file, "wt", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
