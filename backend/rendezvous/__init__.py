"""Rendezvous server: pairs two clients that agree on a room id."""
