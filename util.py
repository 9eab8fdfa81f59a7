# Twophase, copyright 2022 Zach Wegner
#
# This file is part of Twophase.
#
# Twophase is free software: you can redistribute it and/or modify it under the
# terms of the GNU Affero General Public License as published by the Free
# Software Foundation, either version 3 of the License, or (at your option) any
# later version.
#
# Twophase is distributed in the hope that it will be useful, but WITHOUT ANY
# WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR
# A PARTICULAR PURPOSE.  See the GNU Affero General Public License for more
# details.
#
# You should have received a copy of the GNU Affero General Public License
# along with Twophase.  If not, see <https://www.gnu.org/licenses/>.

import contextlib
import queue
import threading
import time

import config

def log(msg):
    if config.VERBOSE:
        print(msg)

@contextlib.contextmanager
def time_execution(label):
    start = time.time()
    yield
    log('%s: %.3fs' % (label, time.time() - start))

# Run a batch of independent (fn, args) tasks on at most <workers> threads,
# and wait for all of them. Returns the results in task order. If any task
# fails, the first error is raised here once the others are done.
# The table builders are pure Python, so the GIL keeps them from running in
# parallel: the threads only overlap cache file reads and writes with the
# builds, and a build is a one-time cost once the cache is written.
def run_tasks(tasks, workers=None):
    if workers is None:
        workers = config.WORKERS
    tasks = list(tasks)
    results = [None] * len(tasks)
    errors = []

    task_queue = queue.Queue()
    for [i, [fn, args]] in enumerate(tasks):
        task_queue.put((i, fn, args))

    def worker():
        while True:
            try:
                [i, fn, args] = task_queue.get_nowait()
            except queue.Empty:
                return
            try:
                results[i] = fn(*args)
            except Exception as e:
                errors.append(e)
                return

    threads = [threading.Thread(target=worker, daemon=True)
            for _ in range(max(1, min(workers, len(tasks))))]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    if errors:
        raise errors[0]
    return results

# For certain tasks that take a long time, we put them in a queue for a background
# thread to run. The thread gets started the first time it's needed.
BACKGROUND_QUEUE = queue.Queue()
BACKGROUND_THREAD = None
BACKGROUND_LOCK = threading.Lock()

def sched_background_task(fn, *args):
    global BACKGROUND_THREAD
    with BACKGROUND_LOCK:
        if BACKGROUND_THREAD is None:
            BACKGROUND_THREAD = threading.Thread(target=run_background_thread,
                    daemon=True)
            BACKGROUND_THREAD.start()
    BACKGROUND_QUEUE.put((fn, args))

def run_background_thread():
    while True:
        [task, args] = BACKGROUND_QUEUE.get()
        task(*args)
