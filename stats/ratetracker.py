#!/usr/bin/python
# coding=utf-8
#
# Peak event rate over a sliding window, per key.
#
# For each key we keep the timestamps of the events of the last
# window_seconds, in arrival order. The rate is the number of events in the
# window divided by the window length, and the peak is the largest rate
# observed so far. Old timestamps are only trimmed from the front, so an
# event that arrives out of order stays in the window until the events
# received before it have expired.

import collections

window_seconds = 30

class rate_tracker:
    def __init__(self, window=window_seconds):
        self.window = window
        self.times = dict()
        self.peaks = dict()

    def observe(self, key, timestamp):
        if not key in self.times:
            self.times[key] = collections.deque()
            self.peaks[key] = 0.0
        times = self.times[key]
        oldest = timestamp - self.window
        while len(times) > 0 and times[0] < oldest:
            times.popleft()
        times.append(timestamp)
        rate = len(times) / self.window
        if rate > self.peaks[key]:
            self.peaks[key] = rate
        return self.peaks[key]

    def peak(self, key):
        return self.peaks.get(key, 0.0)

    def window_size(self, key):
        if key in self.times:
            return len(self.times[key])
        return 0
