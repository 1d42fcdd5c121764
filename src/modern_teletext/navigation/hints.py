"""
Navigation hints for page footers.

Hints tell the user what they can type or press on the current page:
selection prompts, the way home to the index, back navigation, the
coloured keys and a few page-range specific notices.
"""

from typing import Dict, List, Optional

from ..models import InputMode, Page
from ..ui.layout_engine import NavigationHint


INDEX_PAGE = "100"

SELECT_HINT = "Enter number to select"
INDEX_HINT = "100=INDEX"
BACK_HINT = "BACK=PREVIOUS"
FALLBACK_HINT = "Enter page number to navigate"


def _color_hints(page: Page) -> List[NavigationHint]:
    groups: Dict[str, List[str]] = {}
    for link in page.links:
        if link.color:
            groups.setdefault(link.color, []).append(link.label)
    return [
        NavigationHint(text=f"{color.upper()}={'/'.join(labels)}", color=color)
        for color, labels in groups.items()
    ]


def _range_hint(page: Page) -> Optional[NavigationHint]:
    number = page.base_number
    if number is None:
        return None
    meta = page.meta
    if 500 <= number < 600 and meta.loading:
        return NavigationHint(text="Generating response...")
    if 600 <= number < 700 and meta.progress is not None:
        return NavigationHint(text=f"Question {meta.progress.current}/{meta.progress.total}")
    if 800 <= number < 900 and meta.settings_page:
        return NavigationHint(text="Use arrows to navigate")
    return None


def generate_navigation_hints(page: Page, can_go_back: bool = False) -> List[NavigationHint]:
    """
    Build the footer hints for a page.

    Custom hints from the page metadata replace everything else. Otherwise
    the list holds, in order: a selection prompt, the index shortcut (not on
    the index itself), the back hint, one hint per link colour, with a
    page-range notice placed in front. An otherwise empty list gets a
    generic prompt.

    Args:
        page: Page to describe
        can_go_back: Whether the router has history to go back to

    Returns:
        Hints in display order
    """
    meta = page.meta
    if meta.custom_hints:
        return [NavigationHint(text=text) for text in meta.custom_hints]

    hints: List[NavigationHint] = []

    if meta.input_mode == InputMode.SINGLE or meta.input_options:
        hints.append(NavigationHint(text=SELECT_HINT))

    if page.id != INDEX_PAGE:
        hints.append(NavigationHint(text=INDEX_HINT))

    if can_go_back:
        hints.append(NavigationHint(text=BACK_HINT))

    hints.extend(_color_hints(page))

    notice = _range_hint(page)
    if notice is not None:
        hints.insert(0, notice)

    if not hints:
        hints.append(NavigationHint(text=FALLBACK_HINT))

    return hints


def generate_selection_hints(option_count: int) -> List[NavigationHint]:
    hints = []
    if 0 < option_count <= 9:
        hints.append(NavigationHint(text=SELECT_HINT))
    hints.append(NavigationHint(text=INDEX_HINT))
    return hints


def generate_content_hints(can_go_back: bool = False, has_more_pages: bool = False) -> List[NavigationHint]:
    hints = [NavigationHint(text=INDEX_HINT)]
    if can_go_back:
        hints.append(NavigationHint(text=BACK_HINT))
    if has_more_pages:
        hints.append(NavigationHint(text="NEXT=Continue"))
    return hints


def generate_ai_hints(is_loading: bool = False, can_go_back: bool = False) -> List[NavigationHint]:
    hints = []
    if is_loading:
        hints.append(NavigationHint(text="Generating response..."))
    hints.append(NavigationHint(text=INDEX_HINT))
    hints.append(NavigationHint(text="500=AI"))
    if can_go_back:
        hints.append(NavigationHint(text=BACK_HINT))
    return hints


def generate_quiz_hints(question_number: Optional[int] = None,
                        total_questions: Optional[int] = None,
                        can_go_back: bool = False) -> List[NavigationHint]:
    hints = []
    if question_number and total_questions:
        hints.append(NavigationHint(text=f"Question {question_number}/{total_questions}"))
    hints.append(NavigationHint(text="Enter 1-4 to answer"))
    hints.append(NavigationHint(text=INDEX_HINT))
    if can_go_back:
        hints.append(NavigationHint(text=BACK_HINT))
    return hints


def generate_error_hints() -> List[NavigationHint]:
    return [NavigationHint(text=INDEX_HINT), NavigationHint(text=BACK_HINT)]


def generate_index_hints() -> List[NavigationHint]:
    return [NavigationHint(text=FALLBACK_HINT)]
