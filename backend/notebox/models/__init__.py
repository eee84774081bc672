"""
Notebox Backend — ORM Models
==============================

    - user.py:    users    (uid → root folder), read-only for this service
    - folder.py:  folders  (id → ordered list of note ids)
    - note.py:    notes    (content-addressed note records)
"""
