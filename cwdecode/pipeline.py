"""Decoding pipeline - compose the four stages.

    chunks -> ToneDetector -> RhythmEncoder -> UnitNormalizer -> TokenClassifier -> tokens

Two compositions share the same stage functions:
- ``decode``: a pull-based generator chain in the calling thread
- ``decode_threaded``: one worker thread per stage joined by bounded
  queues; ``put`` blocks on a full queue, so a slow consumer stalls
  the producers instead of losing data
"""

import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence

from .core import Token, DecoderConfig
from .analysis import ToneDetector
from .processing import RhythmEncoder, UnitNormalizer, skip_leading_silence
from .inference import TokenClassifier

logger = logging.getLogger(__name__)

Stage = Callable[[Iterable[Any]], Iterator[Any]]


@dataclass
class PipelineStats:
    """Statistics from one decoding run."""

    chunks: int = 0
    events: int = 0
    runs: int = 0
    canonical: int = 0
    token_counts: Dict[str, int] = field(default_factory=dict)
    discarded_amplitudes: int = 0
    discarded_runs: int = 0
    units: List[int] = field(default_factory=list)

    def record(self, token: Token) -> None:
        self.token_counts[token.value] = self.token_counts.get(token.value, 0) + 1

    @property
    def total_tokens(self) -> int:
        return sum(self.token_counts.values())

    @property
    def errors(self) -> int:
        return self.token_counts.get(Token.ERROR.value, 0)

    @property
    def error_rate(self) -> float:
        """Fraction of tokens that are ERROR."""
        if self.total_tokens == 0:
            return 0.0
        return self.errors / self.total_tokens

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "chunks": self.chunks,
            "events": self.events,
            "runs": self.runs,
            "canonical": self.canonical,
            "tokens": dict(self.token_counts),
            "errors": self.errors,
            "error_rate": self.error_rate,
            "discarded_amplitudes": self.discarded_amplitudes,
            "discarded_runs": self.discarded_runs,
            "units": list(self.units),
        }


def _counted(items: Iterable[Any], stats: PipelineStats, attr: str) -> Iterator[Any]:
    for item in items:
        setattr(stats, attr, getattr(stats, attr) + 1)
        yield item


# Queue markers for the threaded pipeline
_END = object()


@dataclass
class _Failure:
    error: BaseException


def _drain(source: queue.Queue) -> Iterator[Any]:
    """Yield items from a queue until end of stream; re-raise forwarded failures."""
    while True:
        item = source.get()
        if item is _END:
            return
        if isinstance(item, _Failure):
            raise item.error
        yield item


def _run_stage(stage: Stage, items: Iterable[Any], sink: queue.Queue) -> None:
    """
    Push a stage's output into ``sink``, then end of stream or the failure.

    Every exception, BaseException included, is forwarded as a failure
    marker, so the consumer always receives a terminal item.
    """
    try:
        for item in stage(items):
            sink.put(item)
    except BaseException as exc:
        logger.debug("Stage failed, forwarding downstream: %r", exc)
        sink.put(_Failure(exc))
        return
    sink.put(_END)


class DecoderPipeline:
    """Streaming Morse decoder: sample chunks in, tokens out."""

    def __init__(self, config: Optional[DecoderConfig] = None):
        """
        Initialize DecoderPipeline.

        Args:
            config: Optional DecoderConfig; defaults are used when omitted
        """
        self.config = (config or DecoderConfig()).validate()
        self.stats = PipelineStats()

    def _build(self, stats: PipelineStats) -> List[Stage]:
        config = self.config
        detector = ToneDetector(config.detector_window, flush_partial=config.flush_partial)
        encoder = RhythmEncoder(initial_state=config.initial_state)
        normalizer = UnitNormalizer(config.unit_group, flush_partial=config.flush_partial)
        classifier = TokenClassifier()

        def detect(chunks: Iterable[Sequence[int]]) -> Iterator[bool]:
            yield from _counted(detector.detect(_counted(chunks, stats, "chunks")), stats, "events")
            stats.discarded_amplitudes = detector.discarded

        def encode(events):
            runs = _counted(encoder.encode(events), stats, "runs")
            if config.skip_leading_silence:
                runs = skip_leading_silence(runs)
            return runs

        def normalize(runs):
            yield from _counted(normalizer.normalize_runs(runs), stats, "canonical")
            stats.discarded_runs = normalizer.discarded
            stats.units = list(normalizer.units)

        def classify(values):
            for token in classifier.classify_stream(values):
                stats.record(token)
                yield token

        return [detect, encode, normalize, classify]

    def decode(self, chunks: Iterable[Sequence[int]]) -> Iterator[Token]:
        """
        Decode sample chunks lazily in the calling thread.

        Args:
            chunks: Iterable of non-empty sample chunks

        Yields:
            Tokens in emission order
        """
        stats = self.stats = PipelineStats()
        stream: Iterable[Any] = chunks
        for stage in self._build(stats):
            stream = stage(stream)
        logger.info("Decoding started")
        yield from stream
        logger.info(
            "Decoding finished: %d chunks, %d tokens, %d errors",
            stats.chunks, stats.total_tokens, stats.errors,
        )

    def decode_events(self, events: Iterable[bool]) -> Iterator[Token]:
        """Decode tone events directly, bypassing the tone detector."""
        stats = self.stats = PipelineStats()
        stream: Iterable[Any] = _counted(events, stats, "events")
        for stage in self._build(stats)[1:]:
            stream = stage(stream)
        yield from stream

    def decode_threaded(
        self,
        chunks: Iterable[Sequence[int]],
        queue_size: Optional[int] = None,
    ) -> Iterator[Token]:
        """
        Decode with one worker thread per stage.

        Args:
            chunks: Iterable of non-empty sample chunks
            queue_size: Capacity of each inter-stage queue (default: config.queue_size)

        Yields:
            Tokens in emission order

        Raises:
            ValueError: Re-raised from a stage that hit a contract violation

        Workers are daemon threads, joined only once the stream has been
        consumed to its end. After a failure or an early stop, upstream
        workers may stay blocked on a full queue; they do not prevent
        interpreter exit.
        """
        size = queue_size if queue_size is not None else self.config.queue_size
        if size < 1:
            raise ValueError(f"queue_size must be >= 1, got {size}")

        stats = self.stats = PipelineStats()
        stages = self._build(stats)
        queues = [queue.Queue(maxsize=size) for _ in range(len(stages) + 1)]

        workers = [
            threading.Thread(
                target=_run_stage,
                args=(lambda items: iter(items), chunks, queues[0]),
                name="cwdecode-source",
                daemon=True,
            )
        ]
        for i, stage in enumerate(stages):
            workers.append(
                threading.Thread(
                    target=_run_stage,
                    args=(stage, _drain(queues[i]), queues[i + 1]),
                    name=f"cwdecode-{stage.__name__}",
                    daemon=True,
                )
            )

        logger.info("Starting %d pipeline threads (queue size %d)", len(workers), size)
        for worker in workers:
            worker.start()

        yield from _drain(queues[-1])

        for worker in workers:
            worker.join()
        logger.info(
            "Decoding finished: %d chunks, %d tokens, %d errors",
            stats.chunks, stats.total_tokens, stats.errors,
        )


def decode(chunks: Iterable[Sequence[int]], config: Optional[DecoderConfig] = None) -> List[Token]:
    """Decode a finite sequence of sample chunks into a list of tokens."""
    return list(DecoderPipeline(config).decode(chunks))
