"""
Scenario catalog.

Maps each simulation output directory (relative to the run date directory)
to the human readable scenario label used in the reports. Several
directories can share a label; the catalog is an ordered sequence of pairs
so those entries are all visited, in this order, on every run.
"""

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class Scenario:
    inpath: str
    label: str


SCENARIOS = (
    Scenario('nonpi-hospitalization/model_output/unifiedNPI/', 'No Intervention'),
    Scenario('kclong-hospitalization/model_output/mid-west-coast-AZ-NV_SocialDistancingLong/', 'Statewide KC 1918'),
    Scenario('wuhan-hospitalization/model_output/unifiedWuhan/', 'Statewide Lockdown 8 weeks'),
    Scenario('hospitalization/model_output/mid-west-coast-AZ-NV_UKFixed_Mild', 'UK-Fixed-8w-FolMild'),
    Scenario('hospitalization/model_output/mid-west-coast-AZ-NV_UKFatigue_Mild', 'UK-Fatigue-8w-FolMild'),
    Scenario('hospitalization/model_output/mid-west-coast-AZ-NV_UKFixed_Pulse', 'UK-Fixed-8w-FolPulse'),
    Scenario('hospitalization/model_output/mid-west-coast-AZ-NV_UKFatigue_Pulse', 'UK-Fatigue-8w-FolPulse'),
    Scenario('hospitalization/model_output/mid-west-coast-AZ-NV_Lockdown_continued', 'Continued Lockdown'),
    Scenario('hospitalization/model_output/mid-west-coast-AZ-NV_Lockdown_fastOpen', 'Fast-paced Reopening'),
    Scenario('hospitalization/model_output/mid-west-coast-AZ-NV_Lockdown_moderateOpen', 'Moderate-paced Reopening'),
    Scenario('hospitalization/model_output/mid-west-coast-AZ-NV_Lockdown_slowOpen', 'Slow-paced Reopening'),
    Scenario('west-coast-AZ-NV_Lockdown_continued', 'Continued Lockdown'),
    Scenario('west-coast-AZ-NV_Lockdown_fastOpen', 'Fast-paced Reopening'),
    Scenario('west-coast-AZ-NV_Lockdown_moderateOpen', 'Moderate-paced Reopening'),
    Scenario('west-coast-AZ-NV_Lockdown_slowOpen', 'Slow-paced Reopening'),
    Scenario('hospitalization/model_output/California_Lockdown_continued', 'Continued Lockdown'),
    Scenario('hospitalization/model_output/California_Lockdown_fastOpen', 'Fast-paced Reopening'),
    Scenario('hospitalization/model_output/California_Lockdown_moderateOpen', 'Moderate-paced Reopening'),
    Scenario('hospitalization/model_output/California_Lockdown_slowOpen', 'Slow-paced Reopening'),
    Scenario('hospitalization/model_output/California_June_inference', 'Inference'),
)


def scenario_labels(scenarios: Iterable[Scenario] = SCENARIOS) -> List[str]:
    """Distinct labels in first-seen catalog order."""
    labels = []
    for scenario in scenarios:
        if scenario.label not in labels:
            labels.append(scenario.label)
    return labels
