"""
Assemble a finished exploration into a single APIInfo report.
"""

from __future__ import annotations

from typing import Dict, List

from models.enums import StepKind, StepStatus
from models.schema import APIInfo, ChromiumStatus, ExplorationStep
from resolvers.mdn import default_browser_support


def build_api_info(steps: List[ExplorationStep], user_query: str = "") -> APIInfo:
    """
    Fold completed step results into an APIInfo.

    Steps that errored leave their field at an empty / default value,
    so the report can always be built.

    Args:
        steps: Steps returned by ``Explorer.run``
        user_query: Used as the name if step 1 did not complete

    Returns:
        APIInfo for the run
    """
    results: Dict[StepKind, object] = {
        step.result.kind: step.result
        for step in steps
        if step.status == StepStatus.COMPLETED and step.result is not None
    }

    name_result = results.get(StepKind.API_NAME)
    name = name_result.api_name if name_result else user_query.strip()

    intro = results.get(StepKind.INTRODUCTION)
    support = results.get(StepKind.BROWSER_SUPPORT)
    explainer = results.get(StepKind.EXPLAINER)
    issues = results.get(StepKind.ISSUES)
    bugs = results.get(StepKind.BUGS)
    status = results.get(StepKind.STATUS)
    prediction = results.get(StepKind.PREDICTION)

    return APIInfo(
        name=name,
        description=intro.description if intro else "",
        mdn_url=intro.mdn_url if intro else "",
        browser_support=support.browser_support if support else default_browser_support(),
        explainer=explainer.explainer if explainer else None,
        github_issues=issues.issues if issues else [],
        chromium_bugs=bugs.bugs if bugs else [],
        chromium_status=(
            ChromiumStatus(summary=status.summary, recent_changes=status.recent_changes)
            if status
            else ChromiumStatus(summary="")
        ),
        future_prediction=prediction.prediction if prediction else "",
    )
