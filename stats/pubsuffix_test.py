#!/usr/bin/python
# coding=utf-8
#
# Unit test of the pubsuffix module, on an extract of the public suffix list.

import pytest
import dnsname
import logsample_test
import pubsuffix

suffix_list_text = """// This Source Code Form is subject to the terms of the Mozilla Public
// License, v. 2.0.

// ===BEGIN ICANN DOMAINS===
com
nl
uk
co.uk
jp
ac.jp
kyoto.jp
ide.kyoto.jp
*.kawasaki.jp
!city.kawasaki.jp
*.ck
!www.ck
ir
xn--mgba3a4fra.ir
ಭಾರತ
香港
xn--wcvs22d.xn--j6w193g
// ===END ICANN DOMAINS===

// ===BEGIN PRIVATE DOMAINS===
s3.dualstack.ap-northeast-1.amazonaws.com
dh.bytemark.co.uk   // trailing comment
*.compute.example
// ===END PRIVATE DOMAINS===
"""

@pytest.fixture(scope="module")
def ps(tmp_path_factory):
    suffix_file = tmp_path_factory.mktemp("psl") / "public_suffix_list.dat"
    suffix_file.write_text(suffix_list_text, encoding="utf-8")
    ps = pubsuffix.public_suffix()
    assert ps.load_file(str(suffix_file))
    return ps

def check_match(ps, name, is_subdomain, suffix):
    result = ps.match(logsample_test.text_to_labels(name))
    assert result is not None, "no match for <" + name + ">"
    assert result == (is_subdomain, logsample_test.text_to_labels(suffix)), "for <" + name + "> got " + dnsname.labels_to_text(result[1])

def test_load_counts(ps):
    assert ps.nb_rules == 18
    assert ps.nb_errors == 0

def test_load_missing_file():
    ps = pubsuffix.public_suffix()
    assert not ps.load_file("/nonexistent/public_suffix_list.dat")

def test_idna_rules_are_ascii(ps):
    check_match(ps, "xn--2scrj9c", False, "xn--2scrj9c")
    check_match(ps, "xn--j6w193g", False, "xn--j6w193g")

@pytest.mark.parametrize("tld", ["nl", "com", "xn--2scrj9c"])
def test_valid_tld(ps, tld):
    check_match(ps, tld, False, tld)

@pytest.mark.parametrize("tld", ["invalid", "test", "a"])
def test_invalid_tld(ps, tld):
    assert ps.match(logsample_test.text_to_labels(tld)) is None

@pytest.mark.parametrize("suffix", ["dh.bytemark.co.uk", "co.uk", "xn--wcvs22d.xn--j6w193g"])
def test_valid_suffix(ps, suffix):
    check_match(ps, suffix, False, suffix)

@pytest.mark.parametrize("suffix", ["dh.bytemark.co.uk", "co.uk", "xn--wcvs22d.xn--j6w193g", "com"])
def test_subdomain_of_valid_suffix(ps, suffix):
    check_match(ps, "abc." + suffix, True, suffix)

@pytest.mark.parametrize("suffix", [
    "s3.dualstack.ap-northeast-1.amazonaws.com",
    "xn--mgba3a4fra.ir",
    "xn--wcvs22d.xn--j6w193g",
    "xn--2scrj9c"])
def test_longer_subdomain_of_valid_suffix(ps, suffix):
    check_match(ps, "a.b.c.test." + suffix, True, suffix)

def test_longest_rule_wins(ps):
    check_match(ps, "www.example.ide.kyoto.jp", True, "ide.kyoto.jp")
    check_match(ps, "www.example.kyoto.jp", True, "kyoto.jp")
    check_match(ps, "example.jp", True, "jp")

def test_wildcard(ps):
    check_match(ps, "kawasaki.jp", False, "kawasaki.jp")
    check_match(ps, "test.kawasaki.jp", False, "test.kawasaki.jp")
    check_match(ps, "www.test.kawasaki.jp", True, "test.kawasaki.jp")

def test_wildcard_without_parent_rule(ps):
    check_match(ps, "a.b.compute.example", True, "b.compute.example")
    check_match(ps, "compute.example", False, "compute.example")
    assert ps.match(logsample_test.text_to_labels("example")) is None

def test_wildcard_exception(ps):
    check_match(ps, "city.kawasaki.jp", True, "kawasaki.jp")
    check_match(ps, "www.city.kawasaki.jp", True, "kawasaki.jp")
    check_match(ps, "www.ck", True, "ck")
    check_match(ps, "b.test.ck", True, "test.ck")

def test_root_only(ps):
    assert ps.match((b"",)) == (False, (b"",))

def test_case_is_not_folded(ps):
    assert ps.match(logsample_test.text_to_labels("EXAMPLE.COM")) is None

def test_orphan_exception_is_ignored():
    ps = pubsuffix.public_suffix()
    ps.load_lines(["jp", "!city.nowhere.jp"])
    assert ps.nb_rules == 1
    check_match(ps, "city.nowhere.jp", True, "jp")

def test_bad_rule_is_skipped():
    ps = pubsuffix.public_suffix()
    ps.load_lines(["com", "a..b", "x" * 70 + ".org"])
    assert ps.nb_rules == 1
    assert ps.nb_errors == 2

def test_rule_from_text():
    assert pubsuffix.rule_from_text("*.kawasaki.jp") == (pubsuffix.rule_wildcard, (b"kawasaki", b"jp"))
    assert pubsuffix.rule_from_text("!city.kawasaki.jp") == (pubsuffix.rule_exception, (b"city", b"kawasaki", b"jp"))
    assert pubsuffix.rule_from_text("co.uk") == (pubsuffix.rule_normal, (b"co", b"uk"))
