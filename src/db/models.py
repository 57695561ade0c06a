"""Database table name constants."""

# Table names used in Supabase queries
PROFILES = "profiles"
CREDIT_TRANSACTIONS = "credit_transactions"
GENERATED_IMAGES = "generated_images"
VOICE_INTERACTIONS = "voice_interactions"
LLM_OBSERVATIONS = "llm_observations"
AGENT_COLLABORATIONS = "agent_collaborations"
EVOLUTION_LOGS = "evolution_logs"

# Chat roles
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLE_SYSTEM = "system"
VALID_ROLES = {ROLE_USER, ROLE_ASSISTANT, ROLE_SYSTEM}
