"""
Curated medicine vocabulary and interaction rules.

The tables here are built once at import time and never mutated:
- COMMON_MEDICINES: names recognizable in prescription OCR text
- DRUG_INTERACTIONS: interaction rules keyed by subject drug
- FALLBACK_MEDICINE_DATA: label details used when OpenFDA has no answer
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from rxcheck.constants import SeverityLevel


# Generic and brand names, grouped so synonyms sit next to each other
COMMON_MEDICINES: Tuple[str, ...] = (
    "paracetamol", "acetaminophen", "tylenol",
    "ibuprofen", "advil", "motrin",
    "aspirin", "bayer",
    "amoxicillin", "penicillin",
    "azithromycin", "zithromax",
    "ciprofloxacin", "cipro",
    "metformin", "glucophage",
    "lisinopril", "prinivil",
    "atorvastatin", "lipitor",
    "omeprazole", "prilosec",
    "amlodipine", "norvasc",
    "levothyroxine", "synthroid",
    "albuterol", "ventolin",
    "gabapentin", "neurontin",
    "prednisone",
    "tramadol",
    "hydrochlorothiazide",
    "metoprolol",
    "simvastatin",
    "losartan",
    "warfarin",
    "furosemide",
)


@dataclass(frozen=True)
class InteractionRule:
    """A directional interaction rule: `subject` interacts with `partner`."""
    subject: str
    partner: str
    severity: SeverityLevel
    category: str
    description: str


InteractionRuleSet = Mapping[str, Tuple[InteractionRule, ...]]


def build_rule_set(rules: Iterable[InteractionRule]) -> InteractionRuleSet:
    """
    Group rules by subject into a read-only rule set.

    Authoring order is kept within each subject.
    """
    grouped: Dict[str, List[InteractionRule]] = {}
    for rule in rules:
        grouped.setdefault(rule.subject, []).append(rule)
    return MappingProxyType({subject: tuple(items) for subject, items in grouped.items()})


def rule_set_from_mapping(mapping: Mapping[str, Iterable[InteractionRule]]) -> InteractionRuleSet:
    """
    Freeze an already keyed mapping of rules.

    Raises:
        ValueError: if a rule is stored under a key other than its subject
    """
    frozen: Dict[str, Tuple[InteractionRule, ...]] = {}
    for key, rules in mapping.items():
        rules = tuple(rules)
        for rule in rules:
            if rule.subject != key:
                raise ValueError(
                    f"Rule for '{rule.subject}' stored under key '{key}'"
                )
        frozen[key] = rules
    return MappingProxyType(frozen)


_HEPATOTOXICITY = ("High", "Hepatotoxicity Risk", "Concurrent use may increase risk of liver damage")
_ANTICOAGULATION = ("Medium", "Enhanced Anticoagulation", "May increase anticoagulant effect")
_BLEEDING = ("High", "Bleeding Risk", "Increased risk of bleeding")


def _rule(subject: str, partner: str, severity: str, category: str, description: str) -> InteractionRule:
    return InteractionRule(subject, partner, SeverityLevel(severity), category, description)


DRUG_INTERACTIONS: InteractionRuleSet = build_rule_set([
    _rule("paracetamol", "alcohol", *_HEPATOTOXICITY),
    _rule("paracetamol", "warfarin", *_ANTICOAGULATION),

    _rule("acetaminophen", "alcohol", *_HEPATOTOXICITY),

    _rule("ibuprofen", "lisinopril", "Medium", "Reduced Effectiveness",
          "May reduce antihypertensive effects"),
    _rule("ibuprofen", "warfarin", *_BLEEDING),
    _rule("ibuprofen", "metoprolol", "Medium", "Reduced Effectiveness",
          "May reduce blood pressure lowering effect"),

    _rule("amoxicillin", "birth control pills", "Medium", "Reduced Effectiveness",
          "May reduce contraceptive effectiveness"),
    _rule("amoxicillin", "warfarin", *_ANTICOAGULATION),

    _rule("aspirin", "warfarin", *_BLEEDING),
    _rule("aspirin", "metformin", "Low", "Blood Sugar",
          "May enhance hypoglycemic effect"),

    _rule("metformin", "alcohol", "High", "Metabolic Risk",
          "Increased risk of lactic acidosis"),

    _rule("warfarin", "aspirin", *_BLEEDING),
    _rule("warfarin", "ibuprofen", *_BLEEDING),
])


# Risk levels used when describing a single medicine
HIGH_RISK_MEDICINES = frozenset({"warfarin", "metformin", "insulin"})
LOW_RISK_MEDICINES = frozenset({"paracetamol", "acetaminophen"})


def get_risk_level(drug_name: str) -> SeverityLevel:
    """Overall risk level of taking a medicine on its own."""
    name = drug_name.lower()
    if name in HIGH_RISK_MEDICINES:
        return SeverityLevel.HIGH
    if name in LOW_RISK_MEDICINES:
        return SeverityLevel.LOW
    return SeverityLevel.MEDIUM


_ANALGESIC_ANTIPYRETIC = {
    "purpose": "Pain reliever and fever reducer",
    "indications": "Used for mild to moderate pain relief and fever reduction",
    "dosage": "500mg every 6 hours, max 4g per day",
    "warnings": "Do not exceed recommended dose. Can cause liver damage if overdosed",
    "side_effects": ("Nausea", "Liver damage (overdose)", "Allergic reactions"),
    "interactions": ("Alcohol (increases liver toxicity)", "Warfarin (may enhance effect)"),
    "risk_level": "Low",
}

FALLBACK_MEDICINE_DATA: Mapping[str, Mapping] = MappingProxyType({
    "paracetamol": MappingProxyType({"name": "Paracetamol", **_ANALGESIC_ANTIPYRETIC}),
    "acetaminophen": MappingProxyType({"name": "Acetaminophen", **_ANALGESIC_ANTIPYRETIC}),
    "ibuprofen": MappingProxyType({
        "name": "Ibuprofen",
        "purpose": "Anti-inflammatory and pain reliever",
        "indications": "Reduces inflammation, pain, and fever",
        "dosage": "200-400mg every 4-6 hours, max 1200mg per day",
        "warnings": "Take with food. May cause stomach bleeding or kidney problems",
        "side_effects": ("Stomach upset", "Nausea", "Dizziness", "Headache"),
        "interactions": ("Blood pressure medications", "Blood thinners", "Aspirin"),
        "risk_level": "Medium",
    }),
    "amoxicillin": MappingProxyType({
        "name": "Amoxicillin",
        "purpose": "Antibiotic",
        "indications": "Treats bacterial infections including respiratory, urinary, and skin infections",
        "dosage": "250-500mg every 8 hours or 500-875mg every 12 hours",
        "warnings": "Complete full course even if feeling better. May cause allergic reactions",
        "side_effects": ("Diarrhea", "Nausea", "Skin rash", "Vomiting"),
        "interactions": ("Birth control pills (reduced effectiveness)", "Warfarin (enhanced effect)"),
        "risk_level": "Medium",
    }),
    "aspirin": MappingProxyType({
        "name": "Aspirin",
        "purpose": "Pain reliever, anti-inflammatory, and blood thinner",
        "indications": "Pain relief, fever reduction, inflammation, cardiovascular protection",
        "dosage": "325-650mg every 4 hours for pain; 81mg daily for heart protection",
        "warnings": "May cause stomach bleeding. Not for children with viral infections",
        "side_effects": ("Stomach irritation", "Nausea", "Ringing in ears", "Bleeding"),
        "interactions": ("Blood thinners (increased bleeding risk)", "Blood pressure medications"),
        "risk_level": "Medium",
    }),
})
