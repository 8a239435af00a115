from enum import Enum
from typing import List, Optional


class ProcessStep(str, Enum):
    """
    提案议事流程的七个步骤，定义顺序即流转顺序。
    """

    PROPOSAL_PRESENTATION = "proposal_presentation"  # 提案陈述
    CLARIFYING_QUESTIONS = "clarifying_questions"  # 澄清提问
    QUICK_REACTIONS = "quick_reactions"  # 快速反应
    OBJECTIONS_ROUND = "objections_round"  # 异议轮
    RESOLVE_OBJECTIONS = "resolve_objections"  # 化解异议
    CONSENT_ROUND = "consent_round"  # 同意轮
    RECORD_OUTCOME = "record_outcome"  # 记录结果

    @classmethod
    def ordered(cls) -> List["ProcessStep"]:
        return list(cls)

    @property
    def is_last(self) -> bool:
        return self is ProcessStep.ordered()[-1]

    def successor(self) -> Optional["ProcessStep"]:
        """返回下一个步骤；最后一步没有后继，返回 None。"""
        steps = ProcessStep.ordered()
        index = steps.index(self)
        if index + 1 >= len(steps):
            return None
        return steps[index + 1]

    @classmethod
    def parse(cls, value: str) -> Optional["ProcessStep"]:
        """
        解析步骤名称，兼容旧版接口使用的简写路径
        (questions / reactions / objections / consent)。
        无法识别时返回 None。
        """
        normalized = (value or "").strip().lower()
        if normalized in _STEP_ALIASES:
            return _STEP_ALIASES[normalized]
        try:
            return cls(normalized)
        except ValueError:
            return None


_STEP_ALIASES = {
    "questions": ProcessStep.CLARIFYING_QUESTIONS,
    "reactions": ProcessStep.QUICK_REACTIONS,
    "objections": ProcessStep.OBJECTIONS_ROUND,
    "consent": ProcessStep.CONSENT_ROUND,
}

# 接受成员提交内容的步骤
SUBMISSION_STEPS = frozenset(
    {
        ProcessStep.CLARIFYING_QUESTIONS,
        ProcessStep.QUICK_REACTIONS,
        ProcessStep.OBJECTIONS_ROUND,
        ProcessStep.CONSENT_ROUND,
    }
)
