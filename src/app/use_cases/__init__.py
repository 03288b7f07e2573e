"""
Use Cases

Organized by area:
- auth/: Google sign-in and session identity
- users/: company status, role selection and role changes
- companies/: company creation, search and settings
- invitations/: issue, verify, accept and manage invitations
- onboarding/: progress tracking, HR overview and dashboard stats
- documents/: employee documents, policies and resumes
- integrations/: GitHub, Jira and Notion connections
"""
