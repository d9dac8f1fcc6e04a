#!/usr/bin/python
# coding=utf-8
#
# Read a binary log record by record while a background task prints how
# much of the file was consumed. The reading loop only publishes a byte
# count; the printer never touches the data being computed.

import concurrent.futures
import os
import sys
import threading

progress_interval = 1.0

class progress_reporter:
    def __init__(self, total_bytes, interval=progress_interval, out=None):
        self.total_bytes = total_bytes
        self.interval = interval
        self.out = out if out is not None else sys.stdout
        self.bytes_read = 0
        self.completed = False
        self.done = threading.Event()
        self.executor = None
        self.future = None

    def add(self, nb_bytes):
        self.bytes_read += nb_bytes

    def percent(self):
        if self.total_bytes <= 0:
            return 100
        return int(100 * self.bytes_read / self.total_bytes)

    def run(self):
        while not self.done.wait(self.interval):
            self.out.write("\r" + str(self.percent()) + "%")
            self.out.flush()

    def start(self):
        self.executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
        self.future = self.executor.submit(self.run)

    def stop(self):
        self.done.set()
        if self.executor is not None:
            self.future.result()
            self.executor.shutdown(wait=True)
            self.executor = None
            if self.completed:
                self.out.write("\r100%\n")
            else:
                self.out.write("\n")
            self.out.flush()

def read_file_with_progress(file_name, read_one, show_progress=True):
    # read_one(stream, index) returns the number of bytes it consumed,
    # 0 at the end of the file.
    index = 0
    reporter = progress_reporter(os.path.getsize(file_name))
    if show_progress:
        reporter.start()
    try:
        with open(file_name, "rb") as stream:
            while True:
                nb_bytes = read_one(stream, index)
                if nb_bytes == 0:
                    reporter.completed = True
                    break
                reporter.add(nb_bytes)
                index += 1
    finally:
        reporter.stop()
    return index
