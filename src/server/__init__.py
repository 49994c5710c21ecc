"""FastAPI server rendering the todo list pages."""
