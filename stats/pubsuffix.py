#!/usr/bin/python
# coding=utf-8
#
# The module provides functions to manage the public suffix list
# (https://publicsuffix.org/list/public_suffix_list.dat) and to find the
# public suffix of a domain name.
#
# Rules are loaded once in a tree keyed by the labels of the suffix, read
# from right to left, so finding the longest rule for a name only visits
# one node per label of the name.
#
# Algorithm
#
# Find the longest rule, normal or wildcard, whose labels are the last labels
# of the name. If there is none, the name has no public suffix.
# For a normal rule, the public suffix is the rule itself.
# For a wildcard rule "*.kawasaki.jp", the public suffix is the rule plus one
# more label of the name, e.g. "example.kawasaki.jp", unless the name ends with
# one of the exceptions of the wildcard, e.g. "!city.kawasaki.jp", in which
# case the public suffix is the base of the wildcard, "kawasaki.jp".
# The name is a subdomain if it has more labels than its public suffix.

import traceback
import dns.exception
import dns.name

rule_normal = 0
rule_wildcard = 1
rule_exception = 2

class suffix_rule:
    def __init__(self, labels, is_wildcard):
        self.labels = labels
        self.is_wildcard = is_wildcard
        self.exceptions = set()

class suffix_node:
    def __init__(self):
        self.children = dict()
        self.normal = None
        self.wildcard = None

def rule_from_text(line):
    # Returns the class of the rule and its labels, as ASCII compatible
    # byte strings, without the "*" or "!" marker.
    n = dns.name.from_unicode(line, origin=None, idna_codec=dns.name.IDNA_2003)
    labels = tuple(n.labels)
    if len(labels) == 0:
        raise ValueError("empty rule")
    if labels[0] == b"*":
        return rule_wildcard, labels[1:]
    elif labels[0].startswith(b"!"):
        return rule_exception, (labels[0][1:],) + labels[1:]
    return rule_normal, labels

def ends_with(labels, suffix):
    start = len(labels) - len(suffix)
    return start >= 0 and labels[start:] == suffix

class public_suffix:
    def __init__(self):
        self.root = suffix_node()
        self.nb_rules = 0
        self.nb_errors = 0

    def insert(self, labels):
        node = self.root
        for label in reversed(labels):
            if not label in node.children:
                node.children[label] = suffix_node()
            node = node.children[label]
        return node

    def load_lines(self, lines):
        wildcards = dict()
        exceptions = []
        for line in lines:
            l = line.strip()
            if len(l) == 0 or l.startswith("//"):
                continue
            l = l.split()[0]
            try:
                s_class, labels = rule_from_text(l)
            except (dns.exception.DNSException, UnicodeError, ValueError) as e:
                print("Cannot parse suffix <" + l + ">: " + str(e))
                self.nb_errors += 1
                continue
            if s_class == rule_exception:
                exceptions.append(labels)
                continue
            node = self.insert(labels)
            if s_class == rule_wildcard:
                if node.wildcard is None:
                    node.wildcard = suffix_rule(labels, True)
                    wildcards[labels] = node.wildcard
                    self.nb_rules += 1
            elif node.normal is None:
                node.normal = suffix_rule(labels, False)
                self.nb_rules += 1
        # exceptions only exist as overrides of a wildcard with the same base
        for ex in exceptions:
            if ex[1:] in wildcards:
                wildcards[ex[1:]].exceptions.add(ex)

    def load_file(self, file_name):
        ret = True
        try:
            with open(file_name, "rt", encoding="utf-8") as f:
                self.load_lines(f)
        except Exception as e:
            traceback.print_exc()
            print("Cannot load <" + file_name + ">: " + str(e))
            ret = False
        return ret

    def longest_rule(self, name):
        best = None
        node = self.root
        for label in reversed(name):
            node = node.children.get(label)
            if node is None:
                break
            if node.normal is not None:
                best = node.normal
            elif node.wildcard is not None:
                best = node.wildcard
        return best

    def match(self, labels):
        labels = tuple(labels)
        if len(labels) == 1:
            # only the root
            return False, labels
        name = labels[:-1]
        rule = self.longest_rule(name)
        if rule is None:
            return None
        if not rule.is_wildcard:
            suffix = rule.labels
        elif any(ends_with(name, ex) for ex in rule.exceptions):
            suffix = rule.labels
        else:
            suffix = name[-(len(rule.labels) + 1):]
        is_subdomain = len(name) > len(suffix)
        return is_subdomain, suffix + (b"",)
