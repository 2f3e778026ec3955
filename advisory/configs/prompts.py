JOB_DESCRIPTION_PROMPT = r"""
Transform this rough request into a professional freelancing job description suitable for a direct-hire platform: "{prompt}".
Focus on project goals, specific deliverables, and required expertise.
"""

RESUME_ANALYSIS_PROMPT = r"""
Job Description: {description}

Task: Analyze this candidate's resume against the job description. Provide a 'Match Score' (0-100), a list of 3 key strengths, and any potential missing skills. Be professional and objective.
"""

DEADLINE_ESTIMATE_PROMPT = r"""
Project Description: {description}
Freelancer Proposal: {proposal}

Estimate a realistic number of days to complete this project based on complexity. Return ONLY a single integer representing the number of days.
"""

SUBMISSION_AUDIT_PROMPT = r"""
Project Goal: {description}
Submitted Repo: {url}

Task: Perform a 'Proof of Work' audit. Acknowledge the repository link and evaluate if it logically aligns with the project goals.
Provide a verdict: '{approved}' or '{revise}'. List 2 key observations about the submission quality.
"""

ESCROW_EXPLAINER_PROMPT = r"""
Explain in simple terms how a blockchain escrow works for any freelancer and client, and why it is safer and cheaper than traditional platforms like Upwork or Fiverr.
"""
