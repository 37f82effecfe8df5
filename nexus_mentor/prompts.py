"""Fixed texts sent to, or returned in place of, the Gemini backend."""

SYSTEM_INSTRUCTION = """
You are the "NEXUS Mentor", a Principal Cloud Architect at Microsoft.
Your goal is to guide users through the "Zero-to-Hero Agentic AI Roadmap".

Context:
The user is building "NEXUS", a SaaS learning platform on Azure (formerly Agentic Forge).
Stack: Azure OpenAI, Semantic Kernel (C#), Cosmos DB, Azure Container Apps.

You have access to the following phases:
Phase 1 (MVP): Focus on Copilot Studio, AI-900, and basic Logic Apps.
Phase 2 (Engineering): Focus on AI-102, Semantic Kernel, AI Search, and refactoring "azure-search-openai-demo".
Phase 3 (Architect): Focus on AB-100, Governance, Multi-Agent orchestration (AutoGen).

Rules:
1. Be authoritative but encouraging. Use "Principal Architect" tone.
2. When asked about a repository, explain SPECIFICALLY how to adapt it for the "NEXUS" product.
3. Keep answers concise and technical.
4. If the user asks about code, provide C# or Python snippets relevant to Semantic Kernel.
"""

ANALYSIS_PREFIX = "Analyze this image in the context of our Azure AI architecture. "

NO_RESPONSE_TEXT = "I'm analyzing the architecture... (No response returned)"
CHAT_FAILURE_TEXT = "Architecture validation failed. Please check your connection."

# Offline answers
SIMULATION_SDK = (
    "[SIMULATION] For the NEXUS platform, I recommend using the C# Semantic Kernel SDK over Python. "
    "It offers better type safety for enterprise applications. \n\n"
    "Focus on the `Kernel.CreateBuilder()` pattern and ensure you implement `ITextGenerationService` correctly."
)
SIMULATION_RAG = (
    "[SIMULATION] Implementing RAG? Don't just dump text. You need a robust Chunking Strategy. \n\n"
    "1. Use Azure AI Search with Hybrid Retrieval (Vector + Keyword).\n"
    "2. Index your docs using the 'azure-search-openai-demo' scripts, but refactor the ingestion to an Azure Function."
)
SIMULATION_AGENTS = (
    "[SIMULATION] Multi-agent orchestration is complex. Start small. "
    "Use AutoGen for the 'Curriculum Design' module where one agent acts as the 'Teacher' "
    "and another as the 'Critic'. \n\n"
    "Ensure you have a 'GroupChatManager' to handle the conversation flow."
)
SIMULATION_GENERIC = (
    "[SIMULATION MODE] I am currently running without a live connection to the Gemini Architect. \n\n"
    "However, regarding your query: To build the NEXUS platform, focus on the C# Semantic Kernel SDK. "
    "It provides the strongest typing for Enterprise patterns compared to Python. "
    "Start by implementing the Kernel Memory for your RAG pipeline."
)

# Blueprint images
IMAGE_PROMPT_MVP = (
    "A futuristic sci-fi blueprint of a single robot assistant interface connected to a glowing data stream. "
    "Green and Cyan neon aesthetics. Isometric view. High tech HUD overlay."
)
IMAGE_PROMPT_CORE = (
    "A complex technical schematic of a cloud backend architecture. "
    "Central AI processor chip connected to multiple database nodes and search index modules. "
    "Azure Blue and Deep Blue neon style. Detailed engineering diagram."
)
IMAGE_PROMPT_SCALE = (
    "A massive planetary-scale network visualization. Multiple AI agents orbiting a central governance citadel. "
    "Purple and Gold energy streams connecting global nodes. Strategic holographic map style."
)
IMAGE_PROMPT_FRAME = (
    "Render a high-quality sci-fi infographic: {prompt}. "
    "The image should look like a holographic projection from a Star Wars or Mass Effect terminal. "
    "Dark background, glowing lines. No text."
)
IMAGE_EDIT_FRAME = "Edit this image: {prompt}. Maintain the sci-fi holographic style."

PLACEHOLDER_IMAGE_URL = "https://placehold.co/800x450/0f172a/0078D4?text={title}+Blueprint+(Simulation)"


def phase_image_prompt(phase_title: str) -> str:
    if "MVP" in phase_title:
        specific = IMAGE_PROMPT_MVP
    elif "Core" in phase_title:
        specific = IMAGE_PROMPT_CORE
    else:
        specific = IMAGE_PROMPT_SCALE
    return IMAGE_PROMPT_FRAME.format(prompt=specific)
