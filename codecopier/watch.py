"""Poll-based change notification for an open root.

A cheap digest over visible tree metadata is recomputed on an interval;
when it changes, a single-slot debounced scheduler coalesces bursts of
changes into one refresh callback.
"""

from __future__ import annotations

import hashlib
import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path

from .file_tree_model import list_directory_children
from .ignore import EMPTY_RULE_SET, IgnoreRuleSet, rule_file_path

logger = logging.getLogger(__name__)


def _update_digest(digest, token: str) -> None:
    """Append a token plus separator byte to a hash digest."""
    digest.update(token.encode("utf-8", errors="surrogateescape"))
    digest.update(b"\0")


def _stat_token(path: Path) -> str:
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return "missing"
    except OSError:
        return "error"
    return f"ok:{st.st_mtime_ns}:{st.st_size}"


def build_tree_watch_signature(root: Path, rule_set: IgnoreRuleSet = EMPTY_RULE_SET) -> str:
    """Build a digest over every visible entry under ``root`` plus the rule file.

    Changes inside ignored directories do not alter the signature.
    """
    root = Path(root)
    digest = hashlib.blake2b(digest_size=20)
    _update_digest(digest, f"root:{root}")
    _update_digest(digest, f"rules:{_stat_token(rule_file_path(root))}")

    pending = [root]
    visited: set[str] = set()
    while pending:
        directory = pending.pop()
        real = os.path.realpath(directory)
        if real in visited:
            continue
        visited.add(real)
        children, scan_error = list_directory_children(directory, root, rule_set)
        if scan_error is not None:
            _update_digest(digest, f"dir_error:{directory}")
            continue
        for child in children:
            _update_digest(digest, f"child:{child.relative_path}:{child.kind}:{_stat_token(child.path)}")
            if child.is_dir:
                pending.append(child.path)

    return digest.hexdigest()


class DebouncedScheduler:
    """Single-slot pending notification backed by a cancellable timer.

    Each ``trigger`` call cancels the pending timer and starts a new one, so
    only the last trigger in a burst fires ``callback``.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        delay_seconds: float,
        *,
        timer_factory: Callable[[float, Callable[[], None]], threading.Timer] = threading.Timer,
    ) -> None:
        self._callback = callback
        self._delay_seconds = delay_seconds
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def trigger(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            generation = self._generation
            timer = self._timer_factory(self._delay_seconds, lambda: self._fire(generation))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A timer that lost a cancel race must not run the callback.
            if generation != self._generation:
                return
            self._timer = None
        try:
            self._callback()
        except Exception:
            logger.exception("Change callback failed")


class TreeWatcher:
    """Background poller that reports debounced "something changed" events."""

    def __init__(
        self,
        root: Path,
        on_change: Callable[[], None],
        *,
        rule_set_provider: Callable[[], IgnoreRuleSet] = lambda: EMPTY_RULE_SET,
        poll_seconds: float = 1.0,
        debounce_seconds: float = 1.0,
    ) -> None:
        self.root = Path(root)
        self._rule_set_provider = rule_set_provider
        self._poll_seconds = poll_seconds
        self._scheduler = DebouncedScheduler(on_change, debounce_seconds)
        self._signature: str | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def poll_once(self) -> bool:
        """Recompute the signature; trigger the scheduler and return ``True`` on change."""
        signature = build_tree_watch_signature(self.root, self._rule_set_provider())
        if self._signature is None:
            self._signature = signature
            return False
        if signature == self._signature:
            return False
        self._signature = signature
        logger.debug("Change detected under %s", self.root)
        self._scheduler.trigger()
        return True

    def _run(self) -> None:
        while not self._stop.wait(self._poll_seconds):
            try:
                self.poll_once()
            except Exception:
                logger.exception("Watch poll failed for %s", self.root)

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._signature = build_tree_watch_signature(self.root, self._rule_set_provider())
        self._thread = threading.Thread(target=self._run, name="codecopier-watch", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        self._scheduler.cancel()
        thread = self._thread
        self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=self._poll_seconds + 1.0)


__all__ = [
    "build_tree_watch_signature",
    "DebouncedScheduler",
    "TreeWatcher",
]
