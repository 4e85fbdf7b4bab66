"""
Sub-package Documentation
==========================

Adaptors which read and write the annotation model to a relational (sqlite) database. One
:class:`~annodb.db.dbadaptor.DBAdaptor` holds the connection and an adaptor for each type of object
"""
