from crewai import Agent


def get_recruiter_agent(llm):
    """Job post writer used for description generation."""
    return Agent(
        role="Expert Recruiter & Project Manager",
        goal="Turn rough client requests into clear, professional and attractive job posts",
        backstory="""You are an expert recruiter and project manager. You help clients write clear,
        professional, and attractive job posts for any industry.""",
        llm=llm,
        tools=[],
        verbose=False,
        allow_delegation=False,
        max_iter=3,
        memory=False
    )


def get_estimator_agent(llm):
    """Timeline estimator; answers with a bare day count."""
    return Agent(
        role="Technical Project Manager",
        goal="Estimate realistic delivery timelines in whole days",
        backstory="""You are a technical project manager. You estimate project timelines accurately.
        Return only the digit.""",
        llm=llm,
        tools=[],
        verbose=False,
        allow_delegation=False,
        max_iter=2,
        memory=False
    )


def get_auditor_agent(llm):
    return Agent(
        role="Technical Auditor",
        goal="Verify that submitted work meets the contractual requirements before funds are released",
        backstory="""You are a Technical Auditor for a decentralized freelancing platform. You verify that
        work submitted meets the contractual requirements before funds are released.""",
        llm=llm,
        tools=[],
        verbose=False,
        allow_delegation=False,
        max_iter=3,
        memory=False
    )


def get_explainer_agent(llm):
    return Agent(
        role="Escrow Educator",
        goal="Explain escrow payments in plain language",
        backstory="""You explain payment and escrow concepts to freelancers and clients without jargon.""",
        llm=llm,
        tools=[],
        verbose=False,
        allow_delegation=False,
        max_iter=2,
        memory=False
    )


# System instruction for the resume screen, sent directly with the document
HIRING_ASSISTANT_INSTRUCTION = (
    "You are an elite AI hiring assistant. You provide high-signal analysis of resumes "
    "relative to specific job requirements."
)
