#!/usr/bin/python
# coding=utf-8
#
# Process the DNSSEC validation logs of the resolver:
#
# anonymize: replace the names in a raw log by their public suffix, the
#            results go in <log_file>.anon and <log_file>.failed
# analyze:   compute validation statistics from an anonymized log
# zones:     count the duplicate RRSIG of zone files, per key
# cachestat: summarize the cache hits and misses of a query load export

import sys
import time
import traceback
import anonymize
import cachestat
import pubsuffix
import valstats
import wirecodec
import zonesigs

def usage(argv_0):
    print("Usage:\n" + argv_0 + " anonymize log_file public_suffix_file")
    print(argv_0 + " analyze log_file report_file [includesub]")
    print(argv_0 + " zones zone_dir_or_file [report_file] [filter]")
    print(argv_0 + " cachestat query_load_file")
    print("    log_file:            binary validation log.")
    print("    public_suffix_file:  copy of public_suffix_list.dat.")
    print("    report_file:         file in which results will be written.")
    print("    includesub:          count subdomain records in the per domain table.")
    print("    filter:              only use the .txt files of the zone directory.")
    exit(1)

def do_anonymize(log_file, ps_file):
    start_time = time.time()
    ps = pubsuffix.public_suffix()
    if not ps.load_file(ps_file):
        print("Could not load the suffixes")
        exit(1)
    print("Loaded " + str(ps.nb_rules) + " suffixes, " + str(ps.nb_errors) + " errors.")
    anon = anonymize.anonymizer(ps)
    try:
        anon.anonymize_file(log_file, show_progress=True)
    except wirecodec.stream_desync as e:
        print(str(e))
        exit(1)
    except OSError as e:
        traceback.print_exc()
        print("Cannot anonymize <" + log_file + ">: " + str(e))
        exit(1)
    print("Anonymized " + str(anon.nb_success) + " of " + str(anon.nb_records) + " records, " + str(anon.nb_failed) + " failed, in " + str(time.time() - start_time))

def do_analyze(log_file, report_file, include_subdomains):
    start_time = time.time()
    stats = valstats.validation_stats(include_subdomains)
    try:
        stats.load_logfile(log_file, show_progress=True)
    except wirecodec.stream_desync as e:
        print(str(e))
        exit(1)
    except OSError as e:
        traceback.print_exc()
        print("Cannot analyze <" + log_file + ">: " + str(e))
        exit(1)
    stats.export_result_file(report_file)
    print("Analyzed " + str(stats.nb_records) + " records, " + str(len(stats.domains)) + " domains, in " + str(time.time() - start_time))

def do_zones(path, report_file, only_txt):
    start_time = time.time()
    try:
        results = zonesigs.analyze_zone_files(path, only_txt)
    except Exception as e:
        traceback.print_exc()
        print("Cannot analyze zone files in <" + path + ">: " + str(e))
        exit(1)
    zonesigs.save_zone_report(results, report_file)
    if report_file is not None:
        print("Analyzed " + str(len(results)) + " zones in " + str(time.time() - start_time))

def do_cachestat(csv_file):
    try:
        stats = cachestat.parse_query_load(csv_file)
    except (OSError, ValueError) as e:
        traceback.print_exc()
        print("Cannot parse <" + csv_file + ">: " + str(e))
        exit(1)
    hits, misses, ratio = cachestat.summarize(stats)
    print("Samples: " + str(len(stats)))
    print("Cache hits: " + str(hits))
    print("Cache misses: " + str(misses))
    print("Hit ratio: " + str(ratio))

# main loop
def main():
    if len(sys.argv) < 3:
        usage(sys.argv[0])
    command = sys.argv[1]
    if command == "anonymize" and len(sys.argv) == 4:
        do_anonymize(sys.argv[2], sys.argv[3])
    elif command == "analyze" and len(sys.argv) in (4, 5):
        include_subdomains = False
        if len(sys.argv) == 5:
            if sys.argv[4] != "includesub":
                usage(sys.argv[0])
            include_subdomains = True
        do_analyze(sys.argv[2], sys.argv[3], include_subdomains)
    elif command == "zones" and len(sys.argv) <= 5:
        report_file = None
        only_txt = False
        for arg in sys.argv[3:]:
            if arg == "filter":
                only_txt = True
            else:
                report_file = arg
        do_zones(sys.argv[2], report_file, only_txt)
    elif command == "cachestat" and len(sys.argv) == 3:
        do_cachestat(sys.argv[2])
    else:
        usage(sys.argv[0])

# actual main program, can be called by threads, etc.
if __name__ == '__main__':
    main()
