"""Freelance Hub: clients, projects and PDF-backed invoices."""
