"""Binary codec for the CXMF container: fields, entities, header, compression."""
