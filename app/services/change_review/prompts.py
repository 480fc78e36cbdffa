"""
Prompts for the change review LLM calls.
"""

from langchain_core.prompts import PromptTemplate

# The response layout matches the category token, assertion and confidence
# patterns in patterns.yaml.
CHANGE_CLASSIFICATION_PROMPT = PromptTemplate.from_template(
    """
    You are a nuclear facility design authority reviewing a proposed engineering change.
    Classify it into one of five design categories:

    - Category I (New Design): new functionality or first installation.
    - Category II (Modification): change to an existing system, procedure or configuration.
    - Category III (Non-Identical Replacement): replacement with different form, fit or function.
    - Category IV (Temporary Modification): change with limited duration that will be restored.
    - Category V (Identical Replacement): like-for-like replacement, same part number.

    Then decide whether a Modification Traveler (MT) is required under 10 CFR 50.59.

    Change description:
    {change_description}

    Respond in plain text using exactly this layout:
    Category: <Category I | Category II | Category III | Category IV | Category V>
    MT Required: <Yes | No>
    Confidence: <number between 0 and 1>
    Key Factors:
    - <factor>
    - <factor>
    Reasoning: <two or three sentences>
    """
)

DOCUMENT_REVIEW_PROMPT = PromptTemplate.from_template(
    """
    You are a technical editor for nuclear facility engineering documents.
    Review the following {document_type} document for technical accuracy and
    regulatory compliance (10 CFR 50 Appendix B, ASME NQA-1).

    Document:
    {document}

    Respond in JSON format with the following keys:
    - "technical_accuracy": number from 0 to 100
    - "compliance_score": number from 0 to 100
    - "identified_standards": list of strings (codes and standards cited)
    - "issues": list of strings (concise findings)
    """
)
