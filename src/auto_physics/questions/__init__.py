"""
Question generation.

Components:
- models.py: QuestionRequest / GeneratedQuestion, IdeaListRequest / QuestionIdea / IdeaBatch
- prompts.py: chat messages for the "detail" and "list" generation modes (id/en)
- parser.py: parsing of "title|->description|->answer|->topic" rows and "<_>"-joined idea rows
- generator.py: QuestionGenerator, serializes generation through a SequentialTaskQueue
"""
