"""Web API for the campus job matcher."""
