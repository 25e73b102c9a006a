"""
Speech pipeline components.

    - styles.py: Style token -> style text resolution
    - naming.py: Filename derivation through the naming model
    - synthesizer.py: google-genai client wrapper (naming + TTS calls)
    - response.py: Audio payload extraction from upstream responses
    - storage.py: PCM -> WAV file writer
"""
