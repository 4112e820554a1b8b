# Prompts sent to the configured LLM provider.
# - TRIPLET_EXTRACTION_PROMPT: log text -> JSON triplets + summary + agent label
# - LOG_SUMMARY_PROMPT: one-sentence summary of arbitrary log text
# - TRIPLET_INSIGHTS_PROMPT: patterns across already extracted triplets
# - HEALTHCARE_LOG_ANALYSIS_PROMPT / FINANCE_LOG_ANALYSIS_PROMPT: domain narratives
#
# Placeholders use str.format, so literal braces in JSON examples are doubled.

TRUNCATION_MARKER = "...(truncated)"

# =============================================================================
# TRIPLET EXTRACTION
# =============================================================================
TRIPLET_EXTRACTION_PROMPT = """
You are an expert knowledge graph extractor. Analyze the following log file content and extract meaningful triplets (subject-predicate-object relationships) from it.

Log content:
{log_content}

Please provide:
1. A list of triplets in the format: subject | predicate | object
2. A brief summary of what this log represents
3. An appropriate agent name for this data source

Format your response as JSON:
{{
  "triplets": [
    {{"subject": "example", "predicate": "relationship", "object": "target", "confidence": 0.9}}
  ],
  "summary": "Brief description of the log content",
  "agent": "LogAnalyzer"
}}

Extract only meaningful, factual relationships. Focus on entities, actions, and their relationships.
"""

# =============================================================================
# SUMMARIES
# =============================================================================
LOG_SUMMARY_PROMPT = "Provide a brief, one-sentence summary of the following log content:\n\n{text}"

TRIPLET_INSIGHTS_PROMPT = """
Analyze these extracted triplets and provide insights:
{triplet_lines}

Provide insights about patterns, relationships, and key findings.
"""

# =============================================================================
# DOMAIN LOG ANALYSIS
# =============================================================================
HEALTHCARE_LOG_ANALYSIS_PROMPT = """
Analyze this healthcare log for medical events, patient interactions, and compliance issues:
{log_excerpt}...

Focus on:
- Patient care events
- Medical procedures
- Consent and privacy compliance
- Staff interactions
- System access logs
"""

FINANCE_LOG_ANALYSIS_PROMPT = """
Analyze this financial log for transactions, market activities, and financial events:
{log_excerpt}...

Focus on:
- Transaction patterns and amounts
- Account activities
- Market movements
- Investment activities
- Expense categories
- Security and compliance events
"""
