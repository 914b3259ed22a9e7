from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any, Callable

import os
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nicegui import ui

from decision import MODES, open_session
from decision import scoring
from decision.core import MAX_WEIGHT, MIN_WEIGHT, DecisionSession
from decision.modes import matrix, proscons
from storage import JsonFileStore, StorageError

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

WEIGHT_HINT = "1 = minor, 5 = major"
VERDICT_CLASSES = {
    "YES": "text-positive",
    "NO": "text-negative",
    "TIE": "text-warning",
}


@dataclass
class AppState:
    proscons: DecisionSession
    matrix: DecisionSession


store = JsonFileStore()
state = AppState(
    proscons=open_session("proscons", store),
    matrix=open_session("matrix", store),
)


def commit(session: DecisionSession, transition: Callable[..., Any], *args: Any) -> bool:
    try:
        session.apply(transition, *args)
    except StorageError as exc:
        logger.error("Could not save %s decision: %s", session.mode.id, exc)
        ui.notify(f"Could not save: {exc}", type="negative")
        return False
    return True


def clear_session(session: DecisionSession, title_input: ui.input) -> None:
    title_input.set_value("")
    try:
        session.clear_all()
    except StorageError as exc:
        logger.error("Could not clear %s decision: %s", session.mode.id, exc)
        ui.notify(f"Could not clear saved data: {exc}", type="negative")
        return
    ui.notify("Cleared: all data has been reset")


def show_mode(mode_id: str | None) -> None:
    landing_page.set_visibility(mode_id is None)
    proscons_page.set_visibility(mode_id == "proscons")
    matrix_page.set_visibility(mode_id == "matrix")


# Pros & cons handlers


def add_item(text: str, kind: str) -> None:
    before = len(state.proscons.state.items)
    if not commit(state.proscons, proscons.add_item, text, kind):
        return
    if len(state.proscons.state.items) == before:
        return
    ui.notify(f"Item added to {'pros' if kind == 'pro' else 'cons'} list")
    items_view.refresh()
    verdict_view.refresh()


def remove_item(item_id: str) -> None:
    commit(state.proscons, proscons.remove_item, item_id)
    items_view.refresh()
    verdict_view.refresh()


def update_item_weight(item_id: str, value: float | None) -> None:
    if value is None:
        return
    commit(state.proscons, proscons.update_item_weight, item_id, value)
    verdict_view.refresh()


def clear_proscons() -> None:
    clear_session(state.proscons, proscons_title_input)
    items_view.refresh()
    verdict_view.refresh()


# Decision matrix handlers


def add_criterion(name: str) -> None:
    before = len(state.matrix.state.criteria)
    if not commit(state.matrix, matrix.add_criterion, name):
        return
    if len(state.matrix.state.criteria) == before:
        return
    ui.notify(f'Criterion added: "{state.matrix.state.criteria[-1].name}"')
    refresh_matrix()


def add_alternative(name: str) -> None:
    before = len(state.matrix.state.alternatives)
    if not commit(state.matrix, matrix.add_alternative, name):
        return
    if len(state.matrix.state.alternatives) == before:
        return
    ui.notify(f'Alternative added: "{state.matrix.state.alternatives[-1].name}"')
    refresh_matrix()


def remove_criterion(criterion_id: str) -> None:
    commit(state.matrix, matrix.remove_criterion, criterion_id)
    refresh_matrix()


def remove_alternative(alternative_id: str) -> None:
    commit(state.matrix, matrix.remove_alternative, alternative_id)
    refresh_matrix()


def update_criterion_weight(criterion_id: str, value: float | None) -> None:
    if value is None:
        return
    commit(state.matrix, matrix.update_criterion_weight, criterion_id, value)
    ranking_view.refresh()


def update_rating(alternative_id: str, criterion_id: str, value: float | None) -> None:
    if value is None:
        return
    commit(state.matrix, matrix.update_rating, alternative_id, criterion_id, value)
    ranking_view.refresh()


def clear_matrix() -> None:
    clear_session(state.matrix, matrix_title_input)
    refresh_matrix()


def refresh_matrix() -> None:
    criteria_view.refresh()
    alternatives_view.refresh()
    ratings_view.refresh()
    ranking_view.refresh()


def weight_slider(value: int, on_change: Callable[[Any], None]) -> ui.slider:
    return ui.slider(min=MIN_WEIGHT, max=MAX_WEIGHT, step=1, value=value, on_change=on_change).props(
        "label markers"
    ).classes("w-48")


ui.page_title("Decision Helper")

with ui.column().classes("w-full max-w-6xl mx-auto p-6"):
    with ui.column().classes("w-full") as landing_page:
        ui.label("Decision Helper").classes("text-3xl font-semibold")
        ui.label("Make better decisions with two small tools. Choose your approach below.").classes(
            "text-gray-500"
        )
        with ui.row().classes("w-full gap-6"):
            for mode_id, mode in MODES.items():
                with ui.card().classes("w-80"):
                    ui.label(mode.name).classes("text-lg font-semibold")
                    ui.label(mode.description).classes("text-gray-500 text-sm")
                    ui.button(f"Start {mode.name}", on_click=lambda m=mode_id: show_mode(m))

    with ui.column().classes("w-full") as proscons_page:
        with ui.row().classes("items-center"):
            ui.button("Back to modes", on_click=lambda: show_mode(None)).props("flat")
            ui.label(MODES["proscons"].name).classes("text-3xl font-semibold")

        with ui.card().classes("w-full"):
            proscons_title_input = ui.input(
                "What decision are you making?",
                value=state.proscons.state.title,
                placeholder="e.g. Should I take the new job?",
            ).classes("w-full")
            proscons_title_input.on_value_change(
                lambda event: commit(state.proscons, proscons.set_title, event.value or "")
            )

        with ui.card().classes("w-full"):
            ui.label("Add an item").classes("text-lg font-semibold")
            with ui.row().classes("items-center"):
                item_input = ui.input("Pro or con")
                kind_toggle = ui.toggle({"pro": "Pro", "con": "Con"}, value="pro")

                def submit_item() -> None:
                    add_item(item_input.value, kind_toggle.value)
                    item_input.set_value("")

                item_input.on("keydown.enter", lambda: submit_item())
                ui.button("Add", on_click=submit_item)

        @ui.refreshable
        def items_view() -> None:
            with ui.row().classes("w-full gap-6"):
                for kind, title, items in (
                    ("pro", "Pros", scoring.pros(state.proscons.state)),
                    ("con", "Cons", scoring.cons(state.proscons.state)),
                ):
                    with ui.card().classes("flex-1"):
                        ui.label(f"{title} ({len(items)})").classes(
                            "text-lg font-semibold " + ("text-positive" if kind == "pro" else "text-negative")
                        )
                        if not items:
                            ui.label(f"No {title.lower()} yet.").classes("text-gray-500")
                            continue
                        for item in items:
                            with ui.row().classes("w-full items-center justify-between"):
                                ui.label(item.text).classes("break-words")
                                ui.button(
                                    "Remove", on_click=lambda i=item.id: remove_item(i)
                                ).props("outline color=negative dense")
                            weight_slider(
                                item.weight,
                                lambda e, i=item.id: update_item_weight(i, e.value),
                            )
            ui.label(f"Weights: {WEIGHT_HINT}.").classes("text-sm text-gray-500")

        items_view()

        with ui.card().classes("w-full"):
            ui.label("Result").classes("text-lg font-semibold")

            @ui.refreshable
            def verdict_view() -> None:
                summary = scoring.summarize(state.proscons.state)
                with ui.row().classes("items-center gap-6"):
                    ui.label(f"Pros: {summary.pro_total}").classes("text-positive")
                    ui.label(f"Cons: {summary.con_total}").classes("text-negative")
                    ui.label(f"Net: {summary.net_result:+d}")
                ui.linear_progress(value=summary.pro_share, show_value=False).props("color=positive")
                ui.linear_progress(value=summary.con_share, show_value=False).props("color=negative")
                ui.label(scoring.result_message(summary.net_result)).classes(
                    f"text-xl font-semibold {VERDICT_CLASSES[summary.label]}"
                )

            verdict_view()

        ui.button("Clear all", on_click=clear_proscons).props("outline color=negative")

    with ui.column().classes("w-full") as matrix_page:
        with ui.row().classes("items-center"):
            ui.button("Back to modes", on_click=lambda: show_mode(None)).props("flat")
            ui.label(MODES["matrix"].name).classes("text-3xl font-semibold")

        with ui.card().classes("w-full"):
            matrix_title_input = ui.input(
                "What decision are you making?",
                value=state.matrix.state.title,
                placeholder="e.g. Which city to move to?",
            ).classes("w-full")
            matrix_title_input.on_value_change(
                lambda event: commit(state.matrix, matrix.set_title, event.value or "")
            )

        with ui.row().classes("w-full gap-6"):
            with ui.card().classes("flex-1"):
                ui.label("Decision criteria").classes("text-lg font-semibold")
                with ui.row().classes("items-center"):
                    criterion_input = ui.input("Criterion name", placeholder="e.g. Cost, Safety")

                    def submit_criterion() -> None:
                        add_criterion(criterion_input.value)
                        criterion_input.set_value("")

                    criterion_input.on("keydown.enter", lambda: submit_criterion())
                    ui.button("Add", on_click=submit_criterion)

                @ui.refreshable
                def criteria_view() -> None:
                    if not state.matrix.state.criteria:
                        ui.label("No criteria yet.").classes("text-gray-500")
                        return
                    for criterion in state.matrix.state.criteria:
                        with ui.row().classes("w-full items-center justify-between"):
                            ui.label(criterion.name)
                            ui.button(
                                "Remove", on_click=lambda c=criterion.id: remove_criterion(c)
                            ).props("outline color=negative dense")
                        ui.label("Importance").classes("text-xs text-gray-500")
                        weight_slider(
                            criterion.weight,
                            lambda e, c=criterion.id: update_criterion_weight(c, e.value),
                        )

                criteria_view()

            with ui.card().classes("flex-1"):
                ui.label("Alternatives").classes("text-lg font-semibold")
                with ui.row().classes("items-center"):
                    alternative_input = ui.input("Alternative name", placeholder="e.g. Lisbon, Berlin")

                    def submit_alternative() -> None:
                        add_alternative(alternative_input.value)
                        alternative_input.set_value("")

                    alternative_input.on("keydown.enter", lambda: submit_alternative())
                    ui.button("Add", on_click=submit_alternative)

                @ui.refreshable
                def alternatives_view() -> None:
                    if not state.matrix.state.alternatives:
                        ui.label("No alternatives yet.").classes("text-gray-500")
                        return
                    for alternative in state.matrix.state.alternatives:
                        with ui.row().classes("w-full items-center justify-between"):
                            ui.label(alternative.name)
                            ui.button(
                                "Remove", on_click=lambda a=alternative.id: remove_alternative(a)
                            ).props("outline color=negative dense")

                alternatives_view()

        with ui.card().classes("w-full"):
            ui.label("Rate each alternative").classes("text-lg font-semibold")

            @ui.refreshable
            def ratings_view() -> None:
                current = state.matrix.state
                if not current.criteria or not current.alternatives:
                    ui.label("Add criteria and alternatives to start rating.").classes("text-gray-500")
                    return
                ui.label("1 = poor, 5 = excellent").classes("text-sm text-gray-500")
                for alternative in current.alternatives:
                    ui.label(alternative.name).classes("text-md font-semibold mt-2")
                    with ui.row().classes("w-full gap-6"):
                        for criterion in current.criteria:
                            with ui.column():
                                ui.label(f"{criterion.name} (weight {criterion.weight})").classes("text-xs")
                                weight_slider(
                                    scoring.get_rating(current, alternative.id, criterion.id),
                                    lambda e, a=alternative.id, c=criterion.id: update_rating(a, c, e.value),
                                )

            ratings_view()

        with ui.card().classes("w-full"):
            ui.label("Ranking").classes("text-lg font-semibold")

            @ui.refreshable
            def ranking_view() -> None:
                ranked = scoring.rank_alternatives(state.matrix.state)
                if not ranked:
                    ui.label("No alternatives to rank yet.").classes("text-gray-500")
                    return
                max_score = ranked[0].score
                for position, result in enumerate(ranked, start=1):
                    with ui.row().classes("w-full items-center gap-4"):
                        label = f"{position}. {result.name}: {result.score}"
                        if position == 1:
                            ui.icon("emoji_events").classes("text-warning")
                            ui.label(label).classes("font-semibold")
                        else:
                            ui.label(label)
                    ui.linear_progress(
                        value=scoring.share(result.score, max_score), show_value=False
                    )

            ranking_view()

        ui.button("Clear all", on_click=clear_matrix).props("outline color=negative")


show_mode(None)
host = os.getenv("HOST", "127.0.0.1")
port = int(os.getenv("PORT", "8080"))
ui.run(reload=False, host=host, port=port, title="Decision Helper")
