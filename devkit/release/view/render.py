from __future__ import annotations

from devkit.output.console import ConsoleProtocol, Style
from devkit.release.domain.check_runs import CheckRuns
from devkit.release.domain.next_release import NextRelease
from devkit.release.domain.pull_request import PullRequest
from devkit.release.domain.status import CombinedStatus


def render_combined_status(status: CombinedStatus, console: ConsoleProtocol) -> None:
    if not status.statuses:
        return

    console.table(
        "Statuses",
        ["Name", "State", "Description", "URL"],
        [
            [s.context_formatted(), s.state, s.description, s.target_url]
            for s in status.statuses
        ],
    )


def render_check_runs(check_runs: CheckRuns, console: ConsoleProtocol) -> None:
    if not check_runs.all():
        return

    console.table(
        "Checks",
        ["Name", "Conclusion", "URL"],
        [
            [run.name_formatted(), run.conclusion or "pending", run.details_url]
            for run in check_runs.all()
        ],
    )


def render_pull_request(pr: PullRequest, console: ConsoleProtocol) -> None:
    console.print(f"#{pr.number} {pr.title}", Style.INFO)
    console.print(pr.html_url, Style.DIM)

    stability = pr.stability.to_uppercase_string()
    console.print(
        f"   Stability: {stability}",
        Style.ERROR if pr.stability.is_unknown else Style.DEFAULT,
    )
    if pr.has_labels():
        console.labels(
            "      Labels:", [(label.name, label.as_hex_code()) for label in pr.labels]
        )
    else:
        console.print("      Labels: No labels set!", Style.ERROR)
    console.print(
        f"   Changelog: {'yes' if pr.changelog_fulfilled else 'no'}",
        Style.SUCCESS if pr.changelog_fulfilled else Style.ERROR,
    )
    if pr.changelog_not_needed:
        console.print("It looks like a changelog is not needed!", Style.WARNING)
    console.newline()


def render_next_release(release: NextRelease, console: ConsoleProtocol) -> None:
    """Render the CI snapshot, the pull requests and the release verdict.

    The changelog Markdown is only written (to stdout) when the release can
    actually ship.
    """
    render_combined_status(release.combined_status, console)
    render_check_runs(release.check_runs, console)

    console.header("Pull Requests")
    for pr in release.pull_requests:
        render_pull_request(pr, console)

    console.header("Release")
    if not release.can_be_released():
        console.error(
            f"Next release would be: {release.next_tag.to_tag()}, but cannot be released yet!"
        )
        for reason in release.blockers():
            console.print(f" - {reason}", Style.DIM)
        console.warning("Please check labels and changelogs of the pull requests!")
        return

    console.success(f"Next release will be: {release.next_tag.to_tag()}")
    console.header("Changelog as Markdown")
    console.markdown(release.changelog.as_markdown())
