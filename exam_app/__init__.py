"""SecureExam: proctored multiple-choice exam application."""
