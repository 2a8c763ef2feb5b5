# app/services/content_templates.py
"""
Deterministic text used when no text-generation provider is configured,
and for bulk draft generation which never calls the provider.
"""

import random
from dataclasses import dataclass

MAX_BULK_POSTS = 10
DEFAULT_SKILLS = ["Software Engineering", "Backend Development", "Programming"]


@dataclass(frozen=True)
class PostTemplate:
    title: str
    content: str


TOPIC_TEMPLATES: dict[str, list[PostTemplate]] = {
    "clean code": [
        PostTemplate(
            title="Clean Code Principles",
            content="""Code is read far more often than it is written.

A few habits that made my code easier to live with:

- Name things after what they mean, not how they work.
- Keep functions small enough to describe without the word "and".
- Delete dead code instead of commenting it out.
- Leave every file a little tidier than you found it.

None of this is clever. All of it compounds.

Which habit made the biggest difference for you?

#CleanCode #SoftwareEngineering #Programming""",
        )
    ],
    "testing": [
        PostTemplate(
            title="Testing for Confidence",
            content="""Coverage numbers do not ship features. Confidence does.

How I think about tests:

- Test behaviour, so refactors do not break the suite.
- Make a failing test point at one cause.
- Keep the suite fast enough that people actually run it.
- Treat tests as documentation of intent.

Good tests let you change code on a Friday afternoon.

What does your testing strategy look like?

#Testing #SoftwareQuality #Engineering""",
        )
    ],
    "architecture": [
        PostTemplate(
            title="Choosing an Architecture",
            content="""Architecture is the set of decisions that are expensive to undo.

What has worked for me:

- Start with clear layers: routes, services, repositories.
- Reach for events when components must not know about each other.
- Split into services only when teams or scaling demand it.
- Keep business rules independent of frameworks.

The right architecture solves your problem, not last year's conference talk.

Which pattern do you reach for first?

#SoftwareArchitecture #SystemDesign #Engineering""",
        )
    ],
    "performance": [
        PostTemplate(
            title="Performance Work That Pays Off",
            content="""Slow software costs users and money.

Where I look first:

- Measure before changing anything.
- Check the database: missing indexes and N+1 queries hide everywhere.
- Cache what is read often and changes rarely.
- Move heavy work off the request path.

The fastest code is the code you do not run.

What is your go-to performance fix?

#Performance #Backend #SoftwareEngineering""",
        )
    ],
    "career": [
        PostTemplate(
            title="Growing a Tech Career",
            content="""A career in tech is a long game.

Lessons I keep coming back to:

- Learn in public; it helps you and the people following along.
- Build real projects, not only tutorials.
- Go deep in one area before going broad.
- Teach what you learn; it is the fastest way to master it.

The best time to start was yesterday. The next best time is today.

What is the best career advice you have received?

#CareerGrowth #TechCareer #Learning""",
        )
    ],
}

DEFAULT_TEMPLATES: list[PostTemplate] = [
    PostTemplate(
        title="Problem-Solving Mindset",
        content="""Good engineers are not the ones who know everything. They are the ones who can work through what they do not know.

My routine for hard problems:

- Understand the problem before proposing a fix.
- Break it into pieces small enough to test.
- Prototype early and let feedback correct the plan.

Problem solving is a skill, and skills improve with practice.

How do you approach a problem you have never seen?

#ProblemSolving #Engineering #SoftwareDevelopment""",
    ),
    PostTemplate(
        title="Code Review Done Well",
        content="""A code review is a conversation about the code, not a verdict on the author.

What makes reviews useful:

- Be specific and kind.
- Ask questions instead of issuing orders.
- Call out the good parts too.
- Keep pull requests small enough to review properly.

Reviews are one of the best teaching tools a team has.

What is your code review philosophy?

#CodeReview #TeamWork #SoftwareEngineering""",
    ),
    PostTemplate(
        title="Documentation Matters",
        content="""Good documentation saves more time than clever code.

Why I write it down:

- Future me will not remember why this decision was made.
- New teammates can onboard without waiting for answers.
- Debugging legacy code is easier with context.

Document the why. The code already shows the what.

Do you document your decisions?

#Documentation #BestPractices #Development""",
    ),
]

FALLBACK_POST_IDEAS: list[dict[str, str]] = [
    {
        "title": "Lessons from a recent project",
        "description": "Walk through a project you shipped: the goal, the hardest problem and what you would do differently.",
        "reason": "Concrete stories show recruiters how you work, not just what you know.",
    },
    {
        "title": "A tool that changed your workflow",
        "description": "Explain a tool or technique you adopted and the measurable difference it made.",
        "reason": "Highlights practical expertise and continuous learning.",
    },
    {
        "title": "Working across time zones",
        "description": "Share how you collaborate with distributed teams: communication habits, async rituals and overlap hours.",
        "reason": "Remote-friendly skills matter for international roles.",
    },
    {
        "title": "A mistake that taught you something",
        "description": "Describe a production incident or bad decision and the lesson it left behind.",
        "reason": "Honest reflection builds trust and shows maturity.",
    },
    {
        "title": "What you are learning right now",
        "description": "Post about a technology you are studying, why you chose it and your first impressions.",
        "reason": "Signals curiosity and keeps your profile current for recruiters.",
    },
]


def _custom_post(topic: str, skills: list[str]) -> str:
    skills_text = ", ".join(skills) if skills else "Software Engineering"
    hashtag = "".join(topic.split())
    return f"""Let's talk about {topic}.

Working with {skills_text}, here is what I have learned:

- The fundamentals matter more than the latest framework.
- Hands-on practice teaches what reading cannot.
- The community is generous; ask questions.
- Sharing what you learn is the best way to learn it.

What has your experience with {topic} been like?

#SoftwareEngineering #Learning #{hashtag}"""


def _all_templates() -> list[PostTemplate]:
    return [t for templates in TOPIC_TEMPLATES.values() for t in templates] + DEFAULT_TEMPLATES


def generate_post_content(
    topic: str | None = None, skills: list[str] | None = None, rng: random.Random | None = None
) -> str:
    """A matching topic template, a custom post for unknown topics, or any template."""
    rng = rng or random.Random()
    if topic:
        topic_lower = topic.lower()
        for category, templates in TOPIC_TEMPLATES.items():
            if category in topic_lower or topic_lower in category:
                return rng.choice(templates).content
        return _custom_post(topic, skills or [])
    return rng.choice(_all_templates()).content


def generate_multiple_posts(
    count: int,
    topic: str | None = None,
    skills: list[str] | None = None,
    rng: random.Random | None = None,
) -> list[str]:
    """Up to MAX_BULK_POSTS drafts; without a topic, templates are not repeated until exhausted."""
    rng = rng or random.Random()
    count = min(count, MAX_BULK_POSTS)
    if topic:
        return [generate_post_content(topic, skills, rng) for _ in range(count)]

    shuffled = _all_templates()
    rng.shuffle(shuffled)
    return [shuffled[i % len(shuffled)].content for i in range(count)]


def recruiter_messages(
    name: str,
    company: str,
    skills: list[str] | None = None,
    experience: str = "",
    language: str = "en",
) -> list[str]:
    """Three outreach messages: professional, friendly and direct."""
    first_name = name.split(" ")[0] if name else ""
    top_skills = ", ".join((skills or [])[:3])

    if language == "pt":
        skills_text = top_skills or "desenvolvimento de software"
        experience_text = f"Com experiência em {experience}, tenho" if experience else "Tenho"
        return [
            f"Olá {first_name},\n\n"
            f"Vi seu perfil e notei que você recruta para a {company}. Sou engenheiro(a) de software "
            f"com experiência em {skills_text} e estou explorando novas oportunidades.\n\n"
            "Adoraria me conectar e saber mais sobre vagas alinhadas ao meu perfil.\n\n"
            "Obrigado(a) pelo seu tempo!\n\nAtenciosamente",
            f"Oi {first_name}!\n\n"
            f"Vi que você trabalha com recrutamento na {company} e quis entrar em contato. "
            f"Sou especializado(a) em {skills_text} e gostaria de entender como posso contribuir com o time.\n\n"
            "Topa uma conversa rápida?\n\nAbraços",
            f"Olá {first_name},\n\n"
            f"Acredito que minhas habilidades em {skills_text} combinam com a {company}. "
            f"{experience_text} um histórico de entregas de qualidade em times multifuncionais.\n\n"
            f"Gostaria de conversar sobre oportunidades na {company}.\n\nAtenciosamente",
        ]

    skills_text = top_skills or "software development"
    experience_text = f"With experience in {experience}, I" if experience else "I"
    return [
        f"Hi {first_name},\n\n"
        f"I came across your profile and noticed you recruit for {company}. I am a software engineer "
        f"with experience in {skills_text}, and I am exploring new opportunities.\n\n"
        "I would love to connect and hear about openings that fit my background.\n\n"
        "Thank you for your time!\n\nBest regards",
        f"Hey {first_name}!\n\n"
        f"I saw that you work in talent acquisition at {company} and wanted to reach out. "
        f"I specialise in {skills_text} and would love to explore how I could contribute to your team.\n\n"
        "Would you be open to a quick chat?\n\nCheers",
        f"Hello {first_name},\n\n"
        f"I believe my skills in {skills_text} could be a great fit for {company}. "
        f"{experience_text} have a track record of shipping high-quality work with cross-functional teams.\n\n"
        f"I would appreciate the chance to discuss openings at {company}.\n\nBest",
    ]
