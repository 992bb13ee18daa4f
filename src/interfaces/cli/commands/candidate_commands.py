"""候補者の分析・検索・検証コマンド."""

import asyncio
import json
import sys

import click

from src.application.dtos.candidate_analysis_dto import AnalyzeCandidateInputDto
from src.application.dtos.candidate_search_dto import SearchCandidatesInputDto
from src.domain.value_objects.candidate_analysis import CandidateAnalysis
from src.domain.value_objects.vote_record import ScopeKind
from src.interfaces.cli.base import BaseCommand, with_error_handling


SCOPE_LABELS = {
    ScopeKind.ZONE: "ゾーン",
    ScopeKind.SECTION: "セクション",
    ScopeKind.NEIGHBORHOOD: "地区",
    ScopeKind.POLLING_PLACE: "投票所",
}


def _create_provider():
    from src.interfaces.factories.election_data_source_factory import (
        ElectionDataSourceFactory,
    )

    return ElectionDataSourceFactory.create_provider()


@click.command()
@click.argument("query")
@click.option("--json", "as_json", is_flag=True, help="JSON形式で出力する")
@click.option("--top", type=click.IntRange(min=0), default=10, help="地区・投票所の表示上限")
@with_error_handling
def analyze(query: str, as_json: bool, top: int):
    """候補者を投票番号または氏名で分析する."""
    asyncio.run(_run_analyze(query, as_json, top))


async def _run_analyze(query: str, as_json: bool, top: int) -> None:
    from src.application.usecases.analyze_candidate_usecase import (
        AnalyzeCandidateUseCase,
    )

    usecase = AnalyzeCandidateUseCase(_create_provider())
    output = await usecase.execute(AnalyzeCandidateInputDto(query=query))

    if as_json:
        click.echo(json.dumps(output.to_dict(), ensure_ascii=False, indent=2))
        if not output.success:
            sys.exit(1)
        return

    if not output.success:
        BaseCommand.error(output.error_message or "分析に失敗しました")
    if not output.found or output.analysis is None:
        BaseCommand.error(f"候補者が見つかりません: {query}")

    _echo_analysis(output.analysis, top)


def _echo_analysis(analysis: CandidateAnalysis, top: int) -> None:
    candidate = analysis.candidate
    click.echo(f"=== {candidate} ===")
    click.echo(f"  氏名:       {candidate.display_name}")
    click.echo(f"  政党:       {candidate.party_code}")
    click.echo(f"  結果:       {candidate.outcome_label}")
    click.echo(f"  総得票数:   {candidate.total_votes:,}")
    click.echo(f"  総合順位:   {analysis.overall_rank} / {analysis.overall_total}")

    click.echo("\n=== 最高記録 ===")
    for kind in ScopeKind:
        record = analysis.best_records.get(kind)
        label = SCOPE_LABELS[kind]
        if record is None:
            click.echo(f"  {label}: なし")
            continue
        click.echo(
            f"  {label}: {record.scope_value} "
            f"({record.candidate_votes:,}票, "
            f"{record.rank_in_scope}位 / {record.total_participants})"
        )

    click.echo("\n=== ゾーン別得票 ===")
    for zone_votes in analysis.zone_distribution:
        click.echo(f"  {zone_votes.zone:>6}: {zone_votes.votes:>10,}")

    for title, votes in (
        ("地区別得票", analysis.votes_by_neighborhood),
        ("投票所別得票", analysis.votes_by_polling_place),
    ):
        ranked = sorted(votes.items(), key=lambda item: item[1], reverse=True)
        shown = min(top, len(ranked))
        click.echo(f"\n=== {title} (上位{shown}件 / 全{len(ranked)}件) ===")
        for name, count in ranked[:top]:
            click.echo(f"  {count:>10,}  {name}")


@click.command()
@click.argument("query")
@click.option("--limit", type=click.IntRange(min=0), default=10, help="表示する候補の上限")
@with_error_handling
def search(query: str, limit: int):
    """名前・投票番号の前方一致で候補者を検索する."""
    asyncio.run(_run_search(query, limit))


async def _run_search(query: str, limit: int) -> None:
    from src.application.usecases.search_candidates_usecase import (
        SearchCandidatesUseCase,
    )

    usecase = SearchCandidatesUseCase(_create_provider())
    output = await usecase.execute(SearchCandidatesInputDto(query=query, limit=limit))
    if not output.success:
        BaseCommand.error(output.error_message or "検索に失敗しました")

    if not output.options:
        click.echo("該当する候補者はいません。")
        return
    for option in output.options:
        click.echo(option.label)


@click.command()
@click.option("--limit", type=click.IntRange(min=0), default=20, help="未一致の名前の表示上限")
@with_error_handling
def validate(limit: int):
    """候補者名簿と得票台帳の名前の整合性を検証する."""
    asyncio.run(_run_validate(limit))


async def _run_validate(limit: int) -> None:
    from src.application.usecases.validate_directory_usecase import (
        ValidateDirectoryUseCase,
    )

    output = await ValidateDirectoryUseCase(_create_provider()).execute()
    if not output.success:
        BaseCommand.error(output.error_message or "検証に失敗しました")

    click.echo("=== データ概要 ===")
    click.echo(f"  データソース:   {output.source_name}")
    click.echo(f"  バージョン:     {output.data_version}")
    click.echo(f"  候補者数:       {output.candidate_count:,}")
    click.echo(f"  得票レコード数: {output.vote_record_count:,}")

    if output.duplicate_ids:
        ids = ", ".join(str(i) for i in output.duplicate_ids)
        click.echo(f"\n=== 重複した候補者ID (全{len(output.duplicate_ids)}件) ===")
        click.echo(f"  {ids}")

    if output.name_collisions:
        click.echo(f"\n=== 名前の衝突 (全{len(output.name_collisions)}件) ===")
        for collision in output.name_collisions:
            click.echo(
                f"  {collision.normalized_name}: "
                f"{collision.overridden_candidate_id} → "
                f"{collision.winning_candidate_id}"
            )

    if output.unmatched_names:
        total = len(output.unmatched_names)
        click.echo(
            f"\n=== 名簿にない名前 (上位{min(limit, total)}件 / 全{total}件) ==="
        )
        ranked = sorted(
            output.unmatched_names.items(), key=lambda item: item[1], reverse=True
        )
        for name, count in ranked[:limit]:
            click.echo(f"  {count:>8,}件  {name}")

    if output.is_clean:
        BaseCommand.echo_success("名簿と台帳の名前は整合しています。")
