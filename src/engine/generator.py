from datetime import date, datetime, timezone
from typing import Any, Iterable, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..lexicon.trie import PrefixDictionary
from .builder import SquareBuilder
from .models import (
    GeneratorConfig,
    GeneratedPuzzle,
    GenerationIssue,
    GenerationReport,
    PuzzleIdentity,
    PuzzleSession,
)
from .rng import DeterministicRandomSource, format_day_key
from .uniqueness import UniquenessVerifier


class PuzzleGenerator(BaseModel):
    """
    Top-level orchestrator for daily and level puzzles.

    Composes the square builder and the uniqueness verifier, retries with
    an advancing random source, and turns the result into a session the
    game layer can use (falling back to a fixed bag when nothing works).

    Attributes:
        dictionary: Words of the configured size
        config: Generation settings
        report: Report of the most recent ``generate`` call
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    dictionary: PrefixDictionary
    config: GeneratorConfig = Field(default_factory=GeneratorConfig)
    report: Optional[GenerationReport] = None

    @classmethod
    def create(
        cls,
        words: Iterable[str],
        config: Optional[GeneratorConfig] = None,
        **config_kwargs: Any
    ) -> "PuzzleGenerator":
        """
        Factory method to build a generator over a word list.

        Args:
            words: Candidate words; anything not of the configured size is dropped
            config: Optional GeneratorConfig instance
            **config_kwargs: Config parameters if config not provided

        Returns:
            Configured PuzzleGenerator instance
        """
        if config is None:
            config = GeneratorConfig(**config_kwargs)

        dictionary = PrefixDictionary(words, length=config.size)
        return cls(dictionary=dictionary, config=config)

    def generate(
        self,
        source: DeterministicRandomSource,
        max_retries: Optional[int] = None,
        verbose: bool = False,
    ) -> Optional[GeneratedPuzzle]:
        """
        Generate one puzzle whose letter bag has exactly one solution.

        Every attempt draws from ``source``: the builder's shuffle and the
        bag shuffle both advance it, so a retry explores a different
        ordering and a replay from the same seed repeats every step.

        Args:
            source: Random source owned by this call
            max_retries: Attempt limit (defaults to config.max_retries; zero or
                less makes no attempts)
            verbose: If True, print progress to stdout

        Returns:
            The puzzle, or None if every attempt failed (see ``report``)
        """
        size = self.config.size
        if max_retries is None:
            max_retries = self.config.max_retries
        max_retries = max(max_retries, 0)
        report = GenerationReport(size=size, max_retries=max_retries)
        self.report = report

        word_count = len(self.dictionary.words_of_length(size))
        if word_count < size:
            report.issues.append(GenerationIssue(
                code="EMPTY_DICTIONARY",
                message=f"Dictionary has {word_count} words of length {size}, need at least {size}"
            ))
            report.outcome = "EMPTY_DICTIONARY"
            if verbose:
                print(f"✗ {report.issues[-1].message}")
            return None

        builder = SquareBuilder(self.dictionary, size=size, max_steps=self.config.max_search_steps)
        verifier = UniquenessVerifier(
            self.dictionary,
            size=size,
            cap=self.config.uniqueness_cap,
            max_steps=self.config.max_uniqueness_steps,
        )

        if verbose:
            print(f"Generating {size}x{size} square from {word_count} words (max {max_retries} attempts)")

        for attempt in range(1, max_retries + 1):
            report.attempts = attempt
            square = builder.build(source)
            report.search_steps += builder.steps

            if square is None:
                if builder.exhausted:
                    # Reshuffling cannot create a square that does not exist
                    report.issues.append(GenerationIssue(
                        code="EXHAUSTED_SEARCH",
                        message=f"No {size}x{size} square exists in the dictionary",
                        attempt=attempt
                    ))
                    report.outcome = "EXHAUSTED_SEARCH"
                    if verbose:
                        print(f"Attempt {attempt}: ✗ search space exhausted, giving up")
                    return None

                report.issues.append(GenerationIssue(
                    code="SEARCH_BUDGET_EXCEEDED",
                    message=f"Search stopped after {builder.steps} steps without a square",
                    attempt=attempt
                ))
                if verbose:
                    print(f"Attempt {attempt}: ✗ search budget exceeded")
                continue

            letters = source.shuffle(list(''.join(square)))
            unique = verifier.is_unique(letters)
            report.uniqueness_steps += verifier.steps

            if not unique:
                reason = "could not be proven unique" if verifier.budget_exceeded else "has other arrangements"
                report.issues.append(GenerationIssue(
                    code="NON_UNIQUE_SOLUTION",
                    message=f"Square {' | '.join(square)} {reason}",
                    attempt=attempt
                ))
                if verbose:
                    print(f"Attempt {attempt}: ✗ {' | '.join(square)} {reason}")
                continue

            report.outcome = "SUCCESS"
            if verbose:
                print(f"Attempt {attempt}: ✓ {' | '.join(square)}")
            return GeneratedPuzzle(letters=letters, solution=square)

        report.issues.append(GenerationIssue(
            code="RETRIES_EXHAUSTED",
            message=f"No unique puzzle after {max_retries} attempts",
            attempt=max_retries
        ))
        report.outcome = "RETRIES_EXHAUSTED"
        if verbose:
            print(f"✗ {report.issues[-1].message}")
        return None

    def generate_daily(
        self,
        day: Optional[date | datetime | str] = None,
        version: Optional[str] = None,
        verbose: bool = False,
    ) -> PuzzleSession:
        """
        Build the session for a UTC day.

        Args:
            day: The day (defaults to today in UTC)
            version: Seed version tag (defaults to config.version)
            verbose: If True, print progress to stdout

        Returns:
            PuzzleSession; a fallback session if generation failed
        """
        if day is None:
            day = datetime.now(timezone.utc)
        day_key = format_day_key(day)
        if version is None:
            version = self.config.version

        source = DeterministicRandomSource.from_day_key(version, day_key)
        puzzle = self.generate(source, verbose=verbose)

        if puzzle is None:
            if verbose:
                print(f"Daily {day_key}: using fallback bag")
            return self._fallback_session(day_key)

        return PuzzleSession(
            identity=PuzzleIdentity(day_key=day_key, bag=puzzle.bag),
            puzzle=puzzle,
        )

    def generate_level(
        self,
        seed: int,
        themed_words: Iterable[str] = (),
        verbose: bool = False,
    ) -> PuzzleSession:
        """
        Build the session for a level, preferring squares with a themed word.

        Themed words are merged into the dictionary (sorted, for a stable
        input order). Attempt ``k`` seeds a fresh source from ``seed + k``;
        the first puzzle containing a themed word wins, otherwise the first
        puzzle found is kept with a seed-derived themed index.

        Args:
            seed: Level seed
            themed_words: The level's world dictionary
            verbose: If True, print progress to stdout

        Returns:
            PuzzleSession keyed ``LEVEL-<seed>``; a fallback session if no
            attempt produced a puzzle
        """
        size = self.config.size
        themed = set(PrefixDictionary(themed_words, length=size))
        merged = sorted(set(self.dictionary.words_of_length(size)) | themed)
        level_generator = PuzzleGenerator.create(merged, config=self.config)
        day_key = f"LEVEL-{seed}"

        found: Optional[GeneratedPuzzle] = None
        found_index: Optional[int] = None

        for attempt in range(self.config.level_attempts):
            source = DeterministicRandomSource.from_seed(seed + attempt)
            puzzle = level_generator.generate(source)
            self.report = level_generator.report

            if puzzle is None:
                if level_generator.report.outcome in ("EMPTY_DICTIONARY", "EXHAUSTED_SEARCH"):
                    break
                continue

            hits = [i for i, row in enumerate(puzzle.solution) if row in themed]
            if hits:
                found, found_index = puzzle, hits[0]
                break

            if found is None:
                found, found_index = puzzle, (seed + attempt) % size
                if not themed:
                    break

        if found is None:
            if verbose:
                print(f"Level {seed}: no puzzle generated, using fallback bag")
            return self._fallback_session(day_key)

        themed_word = found.solution[found_index]
        if verbose:
            if not themed:
                print(f"Level {seed}: themed set is empty; generic square used")
            elif themed_word not in themed:
                print(f"Level {seed}: no themed word hit; using fallback square")
            else:
                print(f"Level {seed}: themed word = {themed_word} @ index {found_index}")

        return PuzzleSession(
            identity=PuzzleIdentity(day_key=day_key, bag=found.bag),
            puzzle=found,
            themed_word=themed_word,
            themed_index=found_index,
        )

    def _fallback_session(self, day_key: str) -> PuzzleSession:
        return PuzzleSession(
            identity=PuzzleIdentity(day_key=day_key, bag=self.config.fallback_bag()),
        )

    def get_state(self) -> dict:
        """
        Get the generator state as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "size": self.config.size,
            "version": self.config.version,
            "words": len(self.dictionary),
            "last_outcome": self.report.outcome if self.report else None,
            "last_attempts": self.report.attempts if self.report else 0,
        }
