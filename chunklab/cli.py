"""
Command-line interface for chunklab.

Chunk text files with any deterministic strategy, browse the strategy
catalog and try keyword ranking against a query. Output is plain text.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from chunklab import __version__
from chunklab.core.base import Chunk, ChunkingResult
from chunklab.core.config import ChunkingOptions, load_options
from chunklab.core.exceptions import ChunkLabError
from chunklab.core.registry import StrategyType, list_strategies
from chunklab.logging_config import LogLevel, configure_logging, get_logger, user_info, user_success
from chunklab.orchestrator import ChunkingOrchestrator
from chunklab.retrieval.scorer import rank_for_query
from chunklab.utils.validation import ChunkValidator

logger = get_logger(__name__)

STRATEGY_CHOICES = [strategy.value for strategy in StrategyType]


def preview(content: str, max_length: int = 100) -> str:
    """Single-line preview of chunk content."""
    flat = " ".join(content.split())
    if len(flat) > max_length:
        return flat[:max_length] + "..."
    return flat


def unescape_separator(value: str) -> str:
    """Interpret backslash escapes such as ``\\n``; other characters pass through unchanged."""
    return value.encode('latin-1', 'backslashreplace').decode('unicode_escape')


def _build_options(config: Optional[Path], overrides: Dict[str, Any]) -> ChunkingOptions:
    base = load_options(config).to_dict() if config else {}
    base.update({key: value for key, value in overrides.items() if value is not None})
    return ChunkingOptions.from_dict(base)


def _read_text(input_file: Path) -> str:
    return input_file.read_text(encoding='utf-8')


def _display_chunk(chunk: Chunk, index: int, full: bool) -> None:
    header = f"[{index}] {chunk.id} ({chunk.kind.value}, {chunk.char_count} chars, {chunk.token_count} tokens)"
    if chunk.parent_id:
        header += f" parent={chunk.parent_id}"
    click.echo(header)
    click.echo(chunk.content if full else f"    {preview(chunk.content)}")
    if chunk.keywords:
        click.echo(f"    keywords: {', '.join(chunk.keywords)}")


def _display_summary(result: ChunkingResult) -> None:
    stats = result.stats
    click.echo("")
    click.echo(f"Strategy: {result.strategy_used}")
    click.echo(f"Chunks: {result.total_chunks} ({stats.total_chunks} retrievable, {len(result.parents)} parents)")
    click.echo(f"Size: avg {stats.avg_size:.1f}, min {stats.min_size}, max {stats.max_size} chars")
    click.echo(f"Tokens: {stats.total_tokens}")
    for bucket, count in stats.size_distribution:
        click.echo(f"  {bucket:>10}: {count}")


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--quiet', '-q', is_flag=True, help='Suppress output except errors')
@click.option('--debug', is_flag=True, help='Enable debug mode with detailed logging')
@click.option('--log-level', type=click.Choice([level.value for level in LogLevel]),
              help='Set specific log level')
@click.option('--log-file', type=click.Path(path_type=Path), help='Write logs to file')
@click.pass_context
def main(ctx: click.Context, verbose: bool, quiet: bool, debug: bool,
         log_level: Optional[str], log_file: Optional[Path]) -> None:
    """
    chunklab CLI

    Split text into retrieval-sized chunks and rank them against queries.
    """
    ctx.ensure_object(dict)

    if debug:
        level = LogLevel.DEBUG
    elif log_level:
        level = LogLevel(log_level)
    elif quiet:
        level = LogLevel.MINIMAL
    elif verbose:
        level = LogLevel.VERBOSE
    else:
        level = LogLevel.NORMAL

    configure_logging(
        level=level,
        file_output=bool(log_file),
        log_file=log_file,
        console_output=not quiet,
        collect_performance=verbose or debug,
    )

    ctx.obj['verbose'] = verbose or debug
    ctx.obj['quiet'] = quiet


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--strategy', '-s', type=click.Choice(STRATEGY_CHOICES), help='Chunking strategy to use')
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML file with chunking options')
@click.option('--chunk-size', type=int, help='Target chunk size')
@click.option('--overlap', type=int, help='Overlap between consecutive chunks')
@click.option('--min-chunk-size', type=int, help='Merge chunks smaller than this')
@click.option('--unit', type=click.Choice(['characters', 'tokens']), help='Unit for all sizes')
@click.option('--parent-size', type=int, help='Enable parent/child chunking with this parent size')
@click.option('--regex', 'regex_pattern', help='Pattern for the regex strategy')
@click.option('--separator', 'separators', multiple=True, help='Separator for the recursive strategy (repeatable)')
@click.option('--full', is_flag=True, help='Print full chunk content instead of previews')
@click.option('--summary-only', is_flag=True, help='Show only the summary, no chunk content')
@click.option('--validate', is_flag=True, help='Validate chunks after creation')
@click.pass_context
def chunk(
    ctx: click.Context,
    input_file: Path,
    strategy: Optional[str],
    config: Optional[Path],
    chunk_size: Optional[int],
    overlap: Optional[int],
    min_chunk_size: Optional[int],
    unit: Optional[str],
    parent_size: Optional[int],
    regex_pattern: Optional[str],
    separators: Tuple[str, ...],
    full: bool,
    summary_only: bool,
    validate: bool
) -> None:
    """Chunk a text file."""
    try:
        options = _build_options(config, {
            'strategy': strategy,
            'chunk_size': chunk_size,
            'overlap': overlap,
            'min_chunk_size': min_chunk_size,
            'size_unit': unit,
            'parent_chunk_size': parent_size,
            'enable_parent_child': True if parent_size else None,
            'regex_pattern': regex_pattern,
            'separators': [unescape_separator(s) for s in separators] or None,
        })
        text = _read_text(input_file)
        result = ChunkingOrchestrator().chunk(text, options)
    except (ChunkLabError, OSError, UnicodeDecodeError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)

    if not summary_only:
        for index, item in enumerate(result.chunks, start=1):
            _display_chunk(item, index, full)

    _display_summary(result)

    if validate:
        issues = ChunkValidator(text).validate_result(result)
        if issues:
            click.echo(f"Validation issues found: {len(issues)}", err=True)
            for issue in issues[:5]:
                click.echo(f"  - {issue}", err=True)
            if len(issues) > 5:
                click.echo(f"  ... and {len(issues) - 5} more", err=True)
            sys.exit(1)
        click.echo("Validation passed")

    if not ctx.obj.get('quiet'):
        user_success(f"Processing complete: {result.total_chunks} chunks in {result.processing_time:.3f}s")


@main.command()
@click.option('--ai/--no-ai', 'requires_ai', default=None, help='Only AI or only deterministic strategies')
@click.option('--show-details', is_flag=True, help='Show best-for and worst-for tags')
def strategies(requires_ai: Optional[bool], show_details: bool) -> None:
    """List available chunking strategies."""
    definitions = list_strategies(requires_ai=requires_ai)
    if not definitions:
        click.echo("No strategies found matching criteria")
        return

    click.echo(f"{'Strategy':<16} {'Complexity':<10} {'AI':<4} {'Description'}")
    click.echo("-" * 80)
    for definition in definitions:
        description = definition.description
        if len(description) > 45:
            description = description[:45] + "..."
        ai_flag = "yes" if definition.requires_ai else "no"
        click.echo(f"{definition.strategy.value:<16} {definition.complexity.value:<10} {ai_flag:<4} {description}")
        if show_details:
            click.echo(f"  Best for: {', '.join(definition.best_for)}")
            click.echo(f"  Worst for: {', '.join(definition.worst_for)}")
            click.echo()


@main.command()
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--query', '-q', required=True, help='Query to rank chunks against')
@click.option('--strategy', '-s', type=click.Choice(STRATEGY_CHOICES), help='Chunking strategy to use')
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML file with chunking options')
@click.option('--chunk-size', type=int, help='Target chunk size')
@click.option('--alpha', type=float, default=0.0, show_default=True,
              help='Vector weight; chunks carry no embeddings here, so 0 ranks on keywords only')
@click.option('--rerank', is_flag=True, help='Apply the rerank adjustment')
@click.option('--top', type=int, default=5, show_default=True, help='Number of results to show')
def rank(
    input_file: Path,
    query: str,
    strategy: Optional[str],
    config: Optional[Path],
    chunk_size: Optional[int],
    alpha: float,
    rerank: bool,
    top: int
) -> None:
    """Chunk a file and rank the chunks against a query by keyword overlap."""
    try:
        options = _build_options(config, {'strategy': strategy, 'chunk_size': chunk_size})
        result = ChunkingOrchestrator().chunk(_read_text(input_file), options)
    except (ChunkLabError, OSError, UnicodeDecodeError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    ranked = rank_for_query(result.chunks, None, query, alpha=alpha, rerank=rerank)
    if not ranked:
        click.echo("No chunks to rank")
        return

    for item in ranked[:max(1, top)]:
        info = item.retrieval
        click.echo(
            f"#{info.rank} {item.id} hybrid={info.hybrid_score:.3f} "
            f"keyword={info.keyword_score:.3f} vector={info.vector_score:.3f}"
        )
        click.echo(f"    {preview(item.content)}")

    user_info(f"Ranked {len(ranked)} chunks for query: {query}")


if __name__ == '__main__':
    main()
