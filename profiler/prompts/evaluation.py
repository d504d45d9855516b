"""Question sets and phase prompts for the multi-question evaluation ("originality meter")."""

from typing import Literal

from profiler.ai.types import ChatMessage

EvaluationMode = Literal["originality", "intelligence", "cogency", "overall_quality", "psychological"]

EVALUATION_MODES: tuple[str, ...] = (
    "originality",
    "intelligence",
    "cogency",
    "overall_quality",
    "psychological",
)

QUESTIONS: dict[str, tuple[str, ...]] = {
    "originality": (
        "IS IT ORIGINAL (NOT IN THE SENSE THAT IT HAS ALREADY BEEN SAID BUT IN THE SENSE THAT ONLY A FECUND MIND COULD COME UP WITH IT)?",
        "ARE THE WAYS THE IDEAS ARE INTERCONNECTED ORIGINAL? OR ARE THOSE INTERCONNECTIONS CONVENTION-DRIVEN AND DOCTRINAIRE?",
        "ARE IDEAS DEVELOPED IN A FRESH AND ORIGINAL WAY? OR IS THE IDEA-DEVELOPMENT MERELY ASSOCIATIVE OR COMMONSENSE-BASED?",
        "IS IT ORIGINAL RELATIVE TO THE DATASET THAT, JUDGING BY WHAT IT SAYS AND HOW IT SAYS IT, IT APPEARS TO BE ADDRESSING?",
        "IS IT ORIGINAL IN A SUBSTANTIVE SENSE OR ONLY IN A FRIVOLOUS TOKEN SENSE?",
        "IF YOU GAVE A ROBOT THE DATASET TO WHICH THE PASSAGE IS A RESPONSE, WOULD IT COME UP WITH THIS?",
        "IS IT BOILERPLATE, OR THE RESULT OF APPLYING BOILERPLATE PROTOCOLS IN A BOILERPLATE WAY?",
        "WOULD AN EDUCATED READER COME AWAY FROM IT MORE ENLIGHTENED AND BETTER EQUIPPED TO ADJUDICATE INTELLECTUAL QUESTIONS?",
        "WOULD A READER COME AWAY WITH INSIGHTS THAT HOLD UP IN GENERAL, OR ONLY RELATIVE TO SOME AUTHOR OR SYSTEM?",
    ),
    "intelligence": (
        "IS IT INSIGHTFUL?",
        "DOES IT DEVELOP POINTS? (OR, IF IT IS A SHORT EXCERPT, IS THERE EVIDENCE THAT IT WOULD DEVELOP POINTS IF EXTENDED)?",
        "IS THE ORGANIZATION MERELY SEQUENTIAL? OR ARE THE IDEAS ARRANGED HIERARCHICALLY?",
        "IF THE POINTS IT MAKES ARE NOT INSIGHTFUL, DOES IT OPERATE SKILLFULLY WITH CANONS OF LOGIC/REASONING?",
        "ARE THE POINTS CLICHES? OR ARE THEY FRESH?",
        "DOES IT USE TECHNICAL JARGON TO OBFUSCATE OR TO RENDER MORE PRECISE?",
        "IS IT ORGANIC? DO POINTS DEVELOP IN A NATURAL WAY, OR ARE THEY FORCED AND ARTIFICIAL?",
        "DOES IT OPEN UP NEW DOMAINS, OR DOES IT SHUT OFF INQUIRY?",
        "IS IT ACTUALLY INTELLIGENT OR JUST THE WORK OF SOMEBODY WHO, JUDGING BY THE SUBJECT-MATTER, IS PRESUMED TO BE INTELLIGENT?",
        "DO THE SENTENCES EXHIBIT COMPLEX AND COHERENT INTERNAL LOGIC?",
        "IS THE PASSAGE GOVERNED BY A STRONG CONCEPT, OR ONLY BY EXPOSITORY NORMS?",
        "IS THERE SYSTEM-LEVEL CONTROL OVER IDEAS?",
        "IS THE WRITING EVASIVE OR DIRECT?",
        "ARE THE STATEMENTS AMBIGUOUS?",
        "DOES THE PROGRESSION OF THE TEXT DEVELOP ACCORDING TO WHO SAID WHAT OR ACCORDING TO WHAT ENTAILS OR CONFIRMS WHAT?",
        "DOES THE AUTHOR USE OTHER AUTHORS TO DEVELOP HIS IDEAS OR TO CLOAK HIS OWN LACK OF IDEAS?",
    ),
    "cogency": (
        "IS THE POINT BEING DEFENDED (IF THERE IS ONE) SHARP ENOUGH THAT IT DOES NOT NEED ARGUMENTATION?",
        "DOES THE REASONING DEFEND THE POINT BEING ARGUED IN THE RIGHT WAYS?",
        "DOES THE REASONING ONLY DEFEND THE ARGUED FOR POINT AGAINST STRAWMEN?",
        "DOES THE REASONING SHOW THAT THE POINT ITSELF IS STRONG, OR ONLY THAT AUTHORITIES WOULD APPROVE OF IT?",
        "IS THE POINT SHARP? IF NOT, IS IT SHARPLY DEFENDED?",
        "WOULD THE REASONING LIKELY MAKE AN INTELLIGENT PERSON RECONSIDER HIS POSITION?",
        "IS THE REASONING ABOUT ESTABLISHING THE KEY CLAIM, OR MORE ABOUT OBFUSCATING?",
        "IS THE 'REASONING' IN FACT REASONING, OR A SERIES OF STATEMENTS THAT CONNECT ONLY SUPERFICIALLY?",
        "IS THE ARGUMENTATION TOKEN AND PRO FORMA, OR DOES IT SHOW THE IDEA TO HAVE MERIT?",
        "TO WHAT EXTENT DOES THE COGENCY DERIVE FROM THE POINT ITSELF, AND TO WHAT EXTENT FROM TORTURED ARGUMENTATION?",
    ),
    "overall_quality": (
        "IS IT INSIGHTFUL?",
        "IS IT TRUE?",
        "DOES IT MAKE AN ADJUDICABLE CLAIM?",
        "DOES IT MAKE A CLAIM ABOUT HOW SOME ISSUE IS TO BE RESOLVED OR ONLY ABOUT HOW SOME 'AUTHORITY' MIGHT FEEL ABOUT IT?",
        "IS IT ORGANIC?",
        "IS IT FRESH?",
        "IS IT THE PRODUCT OF INSIGHT, OR OF RECYCLING SLOGANS AND NAME-DROPPING?",
        "IS IT BORING TO PEOPLE WHO ARE SMART ENOUGH TO UNDERSTAND IT?",
        "WOULD AN INTELLIGENT PERSON FIND IT USEFUL AS AN EPISTEMIC INSTRUMENT?",
        "IS THERE A STRONG OVER-ARCHING IDEA THAT GOVERNS THE REASONING?",
        "IF ORIGINAL, IS IT ORIGINAL BY VIRTUE OF BEING INSIGHTFUL OR BY VIRTUE OF BEING DEFECTIVE?",
        "IS IT SMART BY VIRTUE OF BEING ARGUMENTATIVE OR BY VIRTUE OF BEING ILLUMINATING?",
    ),
    "psychological": (
        "DOES THE TEXT REVEAL A STABLE, COHERENT SELF-CONCEPT, OR IS THE SELF FRAGMENTED/CONTRADICTORY?",
        "IS THERE EVIDENCE OF EGO STRENGTH, OR DOES THE PSYCHE RELY ON BRITTLE DEFENSES?",
        "ARE DEFENSES PRIMARILY MATURE, NEUROTIC, OR PRIMITIVE?",
        "DOES THE WRITING SHOW INTEGRATION OF AFFECT AND THOUGHT?",
        "IS THE AUTHOR'S STANCE DEFENSIVE/AVOIDANT OR DIRECT/ENGAGED?",
        "DOES THE VOICE SUGGEST INTERNAL CONFLICT OR MONOLITHIC CERTAINTY?",
        "IS THE AUTHOR CAPABLE OF IRONY/SELF-REFLECTION?",
        "DOES THE TEXT SUGGEST PSYCHOLOGICAL GROWTH POTENTIAL OR RIGIDITY?",
        "IS THE DISCOURSE PARANOID / PERSECUTORY OR REALITY-BASED?",
        "DOES THE TONE REFLECT AUTHENTIC ENGAGEMENT WITH REALITY, OR PHONY SIMULATION OF DEPTH?",
    ),
}

SCORING_SEMANTICS = (
    "A SCORE OF N/100 (E.G. 73/100) MEANS THAT (100-N)/100 (E.G. 27/100) OUTPERFORM THE AUTHOR "
    "WITH RESPECT TO THE PARAMETER DEFINED BY THE QUESTION."
)

EVALUATOR_STANCE = """YOU ARE NOT GRADING; YOU ARE ANSWERING THESE QUESTIONS. YOU DO NOT USE A RISK-AVERSE STANDARD; YOU DO NOT ATTEMPT TO BE DIPLOMATIC. YOU DO NOT MAKE ASSUMPTIONS ABOUT THE LEVEL OF THE PAPER; IT COULD BE A WORK OF THE HIGHEST EXCELLENCE, OR IT COULD BE VERY WEAK.

DO NOT GIVE CREDIT MERELY FOR USE OF JARGON OR FOR REFERENCING AUTHORITIES. FOCUS ON SUBSTANCE."""


def get_questions(mode: str) -> str:
    try:
        return "\n".join(QUESTIONS[mode])
    except KeyError:
        raise ValueError(f"Unknown evaluation mode: {mode}") from None


def build_phase1_messages(text: str, mode: str) -> list[ChatMessage]:
    content = (
        "First, SUMMARIZE THE TEXT and CATEGORIZE it.\n\n"
        "Then ANSWER THESE QUESTIONS IN CONNECTION WITH THIS TEXT.\n\n"
        f"{get_questions(mode)}\n\n"
        f"{SCORING_SEMANTICS}\n\n"
        f"{EVALUATOR_STANCE}\n\n"
        "For each question: (1) PROVIDE QUOTATIONS, (2) EXPLAIN EXACTLY HOW THOSE QUOTATIONS "
        "SUPPORT YOUR CHARACTERIZATION, then give that question a Score: X/100.\n\n"
        f"TEXT:\n{text}"
    )
    return [ChatMessage(role="user", content=content)]


def build_pushback_messages(text: str, mode: str, score: int) -> list[ChatMessage]:
    content = (
        f"Your position is that {100 - score}/100 outperform the author with respect to the "
        "cognitive metric defined by the question: that is your position, am I right? "
        "And are you sure about that?\n\n"
        "ANSWER THE FOLLOWING QUESTIONS ABOUT THE TEXT DE NOVO, giving each a Score: X/100:\n\n"
        f"{get_questions(mode)}\n\n"
        f"TEXT:\n{text}"
    )
    return [ChatMessage(role="user", content=content)]


def build_consistency_messages(text: str, score: int) -> list[ChatMessage]:
    content = (
        "Are your numerical scores (N/100, E.G. 99/100, 42/100) consistent with the fact that those "
        "are to be taken to mean that (100-N) people out of 100 outperform the author in the relevant "
        "respect? So if a score of 91/100 is awarded to a paper, that means that 9/100 people in a "
        "random sample of the general population are running rings around this person.\n\n"
        f"Current score: {score}/100 - This means {100 - score}/100 outperform the author.\n\n"
        "End with a line \"Final Score: N/100\".\n\n"
        f"TEXT:\n{text}"
    )
    return [ChatMessage(role="user", content=content)]


def build_dual_comparison_messages(mode: str, score_a: int, score_b: int) -> list[ChatMessage]:
    content = (
        f"Compare these two {mode} evaluations. Provide a direct comparison without filtering "
        "or modifying the analysis.\n\n"
        f"Document A Score: {score_a}/100\n"
        f"Document B Score: {score_b}/100\n\n"
        "Generate a comparison report analyzing which document performs better and why."
    )
    return [ChatMessage(role="user", content=content)]
