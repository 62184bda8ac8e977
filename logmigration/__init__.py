"""Log migration - batch write stage for moving logs and attachments into a relational store."""
