"""
Fixed vocabulary of moods a post can be tagged with.

``FeelingType`` is the closed set of accepted types; ``FEELINGS`` maps each
of them to the emoji and description shown alongside a post.
"""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional


class FeelingType(str, Enum):
    HAPPY = "happy"
    EXCITED = "excited"
    GRATEFUL = "grateful"
    LOVED = "loved"
    BLESSED = "blessed"
    AMAZED = "amazed"
    SAD = "sad"
    LONELY = "lonely"
    HEARTBROKEN = "heartbroken"
    DISAPPOINTED = "disappointed"
    WORRIED = "worried"
    ANXIOUS = "anxious"
    ANGRY = "angry"
    FRUSTRATED = "frustrated"
    ANNOYED = "annoyed"
    IRRITATED = "irritated"
    FURIOUS = "furious"
    RAGE = "rage"
    SURPRISED = "surprised"
    SHOCKED = "shocked"
    CONFUSED = "confused"
    CURIOUS = "curious"
    WONDERING = "wondering"
    SCARED = "scared"
    AFRAID = "afraid"
    TERRIFIED = "terrified"
    NERVOUS = "nervous"
    TENSE = "tense"
    STRESSED = "stressed"
    CALM = "calm"
    PEACEFUL = "peaceful"
    RELAXED = "relaxed"
    CONTENT = "content"
    SATISFIED = "satisfied"
    FULFILLED = "fulfilled"
    PROUD = "proud"
    ACCOMPLISHED = "accomplished"
    CONFIDENT = "confident"
    STRONG = "strong"
    POWERFUL = "powerful"
    SUCCESSFUL = "successful"
    TIRED = "tired"
    EXHAUSTED = "exhausted"
    SLEEPY = "sleepy"
    LAZY = "lazy"
    BORED = "bored"
    UNMOTIVATED = "unmotivated"


class FeelingMeta(NamedTuple):
    emoji: str
    description: str


FALLBACK_FEELING = FeelingMeta("😊", "Feeling something")

FEELINGS: Mapping[FeelingType, FeelingMeta] = MappingProxyType({
    FeelingType.HAPPY: FeelingMeta("😊", "Feeling happy and content"),
    FeelingType.EXCITED: FeelingMeta("🤩", "Feeling excited and thrilled"),
    FeelingType.GRATEFUL: FeelingMeta("🙏", "Feeling grateful and thankful"),
    FeelingType.LOVED: FeelingMeta("💕", "Feeling loved and cherished"),
    FeelingType.BLESSED: FeelingMeta("🙌", "Feeling blessed and fortunate"),
    FeelingType.AMAZED: FeelingMeta("😲", "Feeling amazed and astonished"),
    FeelingType.SAD: FeelingMeta("😢", "Feeling sad and down"),
    FeelingType.LONELY: FeelingMeta("😔", "Feeling lonely and isolated"),
    FeelingType.HEARTBROKEN: FeelingMeta("💔", "Feeling heartbroken and devastated"),
    FeelingType.DISAPPOINTED: FeelingMeta("😞", "Feeling disappointed and let down"),
    FeelingType.WORRIED: FeelingMeta("😟", "Feeling worried and concerned"),
    FeelingType.ANXIOUS: FeelingMeta("😰", "Feeling anxious and nervous"),
    FeelingType.ANGRY: FeelingMeta("😠", "Feeling angry and mad"),
    FeelingType.FRUSTRATED: FeelingMeta("😤", "Feeling frustrated and annoyed"),
    FeelingType.ANNOYED: FeelingMeta("😒", "Feeling annoyed and irritated"),
    FeelingType.IRRITATED: FeelingMeta("😤", "Feeling irritated and bothered"),
    FeelingType.FURIOUS: FeelingMeta("😡", "Feeling furious and enraged"),
    FeelingType.RAGE: FeelingMeta("🤬", "Feeling rage and fury"),
    FeelingType.SURPRISED: FeelingMeta("😮", "Feeling surprised and shocked"),
    FeelingType.SHOCKED: FeelingMeta("😱", "Feeling shocked and stunned"),
    FeelingType.CONFUSED: FeelingMeta("😕", "Feeling confused and puzzled"),
    FeelingType.CURIOUS: FeelingMeta("🤔", "Feeling curious and wondering"),
    FeelingType.WONDERING: FeelingMeta("🤨", "Feeling wondering and thinking"),
    FeelingType.SCARED: FeelingMeta("😨", "Feeling scared and frightened"),
    FeelingType.AFRAID: FeelingMeta("😰", "Feeling afraid and fearful"),
    FeelingType.TERRIFIED: FeelingMeta("😱", "Feeling terrified and horrified"),
    FeelingType.NERVOUS: FeelingMeta("😬", "Feeling nervous and tense"),
    FeelingType.TENSE: FeelingMeta("😰", "Feeling tense and stressed"),
    FeelingType.STRESSED: FeelingMeta("😫", "Feeling stressed and overwhelmed"),
    FeelingType.CALM: FeelingMeta("😌", "Feeling calm and peaceful"),
    FeelingType.PEACEFUL: FeelingMeta("😇", "Feeling peaceful and serene"),
    FeelingType.RELAXED: FeelingMeta("😴", "Feeling relaxed and comfortable"),
    FeelingType.CONTENT: FeelingMeta("😊", "Feeling content and satisfied"),
    FeelingType.SATISFIED: FeelingMeta("😌", "Feeling satisfied and fulfilled"),
    FeelingType.FULFILLED: FeelingMeta("😊", "Feeling fulfilled and complete"),
    FeelingType.PROUD: FeelingMeta("😎", "Feeling proud and accomplished"),
    FeelingType.ACCOMPLISHED: FeelingMeta("🏆", "Feeling accomplished and successful"),
    FeelingType.CONFIDENT: FeelingMeta("😤", "Feeling confident and strong"),
    FeelingType.STRONG: FeelingMeta("💪", "Feeling strong and powerful"),
    FeelingType.POWERFUL: FeelingMeta("🔥", "Feeling powerful and unstoppable"),
    FeelingType.SUCCESSFUL: FeelingMeta("🎯", "Feeling successful and victorious"),
    FeelingType.TIRED: FeelingMeta("😴", "Feeling tired and sleepy"),
    FeelingType.EXHAUSTED: FeelingMeta("😫", "Feeling exhausted and drained"),
    FeelingType.SLEEPY: FeelingMeta("😴", "Feeling sleepy and drowsy"),
    FeelingType.LAZY: FeelingMeta("😴", "Feeling lazy and unmotivated"),
    FeelingType.BORED: FeelingMeta("😑", "Feeling bored and uninterested"),
    FeelingType.UNMOTIVATED: FeelingMeta("😐", "Feeling unmotivated and uninspired"),
})


def parse_feeling_type(value: Optional[str]) -> Optional[FeelingType]:
    if not value:
        return None
    try:
        return FeelingType(value)
    except ValueError:
        return None


def lookup_feeling(feeling_type: Optional[str]) -> FeelingMeta:
    parsed = parse_feeling_type(feeling_type)
    if parsed is None:
        return FALLBACK_FEELING
    return FEELINGS[parsed]


def catalog_entries() -> List[Dict[str, str]]:
    return [
        {"type": t.value, "emoji": meta.emoji, "description": meta.description}
        for t, meta in FEELINGS.items()
    ]
