"""
Drug Interaction Service.

Core business logic for finding interaction warnings among a list of medicines.
"""
from collections.abc import Sequence
from typing import List, Optional
import logging

from rxcheck.constants import SeverityLevel
from rxcheck.drug_data import DRUG_INTERACTIONS, InteractionRule, InteractionRuleSet
from rxcheck.schemas import InteractionFinding
from rxcheck.services.name_matcher import contains_either_way

logger = logging.getLogger(__name__)


class InteractionResolver:
    """
    Resolves interaction warnings for a list of medicine names.

    Rules are stored per subject drug but interactions are symmetric, so every
    pair is searched from both sides and the resulting duplicates collapse in
    a final dedup pass. A rule authored under one drug therefore surfaces no
    matter which order the two drugs are listed in.
    """

    def __init__(self, rules: Optional[InteractionRuleSet] = None):
        self.rules = DRUG_INTERACTIONS if rules is None else rules

    def resolve(self, drugs: Sequence) -> List[InteractionFinding]:
        """
        Find interaction warnings among the given medicines.

        Args:
            drugs: Medicine names as supplied (casing kept in the output)

        Returns:
            Findings in discovery order, one per unordered pair of names

        Raises:
            TypeError: if drugs is not a sequence of strings
        """
        if isinstance(drugs, (str, bytes)) or not isinstance(drugs, Sequence):
            raise TypeError(f"drugs must be a sequence of str, got {type(drugs).__name__}")
        for drug in drugs:
            if not isinstance(drug, str):
                raise TypeError(f"drug names must be str, got {type(drug).__name__}")

        lowered = [drug.lower() for drug in drugs]
        findings: List[InteractionFinding] = []

        for i in range(len(drugs)):
            for j in range(i + 1, len(drugs)):
                rule = self._find_rule(lowered[i], lowered[j])
                if rule:
                    findings.append(self._to_finding(drugs[i], drugs[j], rule))

                rule = self._find_rule(lowered[j], lowered[i])
                if rule:
                    findings.append(self._to_finding(drugs[j], drugs[i], rule))

            # Warnings against substances not on the list (e.g. alcohol)
            for rule in self.rules.get(lowered[i], ()):
                partner = rule.partner.lower()
                if not any(partner in name for name in lowered):
                    findings.append(self._to_finding(drugs[i], rule.partner, rule))

        return self._deduplicate(findings)

    def _find_rule(self, subject: str, other: str) -> Optional[InteractionRule]:
        """First rule of `subject` whose partner matches `other` either way."""
        for rule in self.rules.get(subject, ()):
            if contains_either_way(rule.partner.lower(), other):
                return rule
        return None

    @staticmethod
    def _to_finding(drug_a: str, drug_b: str, rule: InteractionRule) -> InteractionFinding:
        return InteractionFinding(
            drug_a=drug_a,
            drug_b=drug_b,
            interaction_type=rule.category,
            severity=rule.severity,
            description=rule.description,
        )

    @staticmethod
    def _deduplicate(findings: List[InteractionFinding]) -> List[InteractionFinding]:
        """Keep the first finding for each unordered pair of names."""
        seen = set()
        unique = []
        for finding in findings:
            if finding.pair in seen:
                continue
            seen.add(finding.pair)
            unique.append(finding)
        return unique


def highest_severity(findings: List[InteractionFinding]) -> Optional[SeverityLevel]:
    """Most severe level among the findings, or None when there are none."""
    if not findings:
        return None
    return max((f.severity for f in findings), key=lambda s: s.rank)


def sort_by_severity(findings: List[InteractionFinding]) -> List[InteractionFinding]:
    """Findings ordered High to Low, keeping discovery order within a level."""
    return sorted(findings, key=lambda f: -f.severity.rank)


def create_interaction_resolver(rules: Optional[InteractionRuleSet] = None) -> InteractionResolver:
    """Factory function to create an interaction resolver."""
    return InteractionResolver(rules)


_default_resolver = InteractionResolver()


def find_interactions(drug_names: Sequence) -> List[InteractionFinding]:
    """Find interaction warnings among the given medicine names."""
    findings = _default_resolver.resolve(drug_names)
    logger.info(f"Found {len(findings)} interactions for {len(drug_names)} medicines")
    return findings
